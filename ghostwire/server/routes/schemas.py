"""Request/response bodies shared by the API routes."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ghostwire.models import RequestModel


class HeaderPayload(BaseModel):
    key: str = ""
    value: str = ""


class AuthPayload(BaseModel):
    """Auth block; only the fields of the chosen type are kept."""

    type: Literal["none", "bearer", "basic"] = "none"
    token: str | None = None
    username: str | None = None
    password: str | None = None


class RequestPayload(BaseModel):
    """Editor request in its persisted JSON shape."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str | None = None
    method: str = "GET"
    url: str = ""
    headers: list[HeaderPayload] = Field(default_factory=lambda: [HeaderPayload()])
    body: str = ""
    scan_type: str = Field(default="all", alias="scanType")
    collection_id: int | None = Field(default=None, alias="collectionId")
    auth: AuthPayload = Field(default_factory=AuthPayload)

    def to_model(self) -> RequestModel:
        return RequestModel.from_dict(self.model_dump(by_alias=True))


class NamePayload(BaseModel):
    """A user-supplied name (collection or saved request)."""

    name: str = Field(..., min_length=1)


def request_to_dict(request: RequestModel) -> dict[str, Any]:
    data = request.to_dict()
    data["displayName"] = request.display_name
    return data

"""Collection model.

A named, ordered group of saved requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ghostwire.models.request import RequestModel, generate_id


@dataclass
class Collection:
    """A user-defined collection of requests.

    Stored requests carry a ``collection_id`` back-reference, but nothing
    enforces that it matches ``id``; imported data may contain dangling or
    duplicated ids.
    """

    name: str
    id: int = field(default_factory=generate_id)
    requests: list[RequestModel] = field(default_factory=list)

    def copy(self, **changes: Any) -> Collection:
        copied = replace(self, requests=[r.copy() for r in self.requests])
        if changes:
            copied = replace(copied, **changes)
        return copied

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "requests": [r.to_dict() for r in self.requests],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Collection:
        raw_requests = data.get("requests")
        requests = (
            [RequestModel.from_dict(r) for r in raw_requests if isinstance(r, dict)]
            if isinstance(raw_requests, list)
            else []
        )
        raw_id = data.get("id")
        try:
            collection_id = int(raw_id) if raw_id is not None else generate_id()
        except (TypeError, ValueError):
            collection_id = generate_id()
        return cls(
            name=str(data.get("name") or ""),
            id=collection_id,
            requests=requests,
        )

"""HTTP request definition models.

The editor, the collections and the history all share one request shape:
method, URL, ordered header rows, body, auth and the scan type forwarded to
the executor when a scan is requested.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union
from urllib.parse import urlparse

DEFAULT_URL = "https://api.github.com"
UNTITLED_REQUEST = "Untitled Request"


_last_id = 0


def generate_id() -> int:
    """Millisecond wall-clock id.

    Ids from one process never repeat (a same-millisecond call is bumped
    by one), but nothing prevents collisions with ids made elsewhere.
    """
    global _last_id
    _last_id = max(int(time.time() * 1000), _last_id + 1)
    return _last_id


class HttpMethod(str, Enum):
    """Methods the editor offers."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: Any) -> HttpMethod:
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.GET


class ScanType(str, Enum):
    """Vulnerability classes the executor can scan for."""

    ALL = "all"
    SQL = "sql"
    XSS = "xss"
    PATH = "path"
    SSRF = "ssrf"
    IDOR = "idor"

    @classmethod
    def parse(cls, value: Any) -> ScanType:
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.ALL


@dataclass(frozen=True)
class Header:
    """A single header row. Blank rows are editor placeholders."""

    key: str = ""
    value: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.key) and bool(self.value)

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: Any) -> Header:
        if not isinstance(data, dict):
            return cls()
        key = data.get("key")
        value = data.get("value")
        return cls(
            key="" if key is None else str(key),
            value="" if value is None else str(value),
        )


# ==================== Auth ====================

@dataclass(frozen=True)
class NoAuth:
    """No authentication."""

    type: str = field(default="none", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class BearerAuth:
    """Bearer token authentication."""

    token: str = ""
    type: str = field(default="bearer", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "token": self.token}


@dataclass(frozen=True)
class BasicAuth:
    """HTTP Basic authentication."""

    username: str = ""
    password: str = ""
    type: str = field(default="basic", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "username": self.username,
            "password": self.password,
        }


Auth = Union[NoAuth, BearerAuth, BasicAuth]


def auth_from_dict(data: Any) -> Auth:
    """Build an auth variant from its persisted form.

    Unknown or missing types collapse to NoAuth. Fields that do not belong
    to the selected type are dropped.
    """
    if not isinstance(data, dict):
        return NoAuth()

    auth_type = str(data.get("type", "none")).lower()
    if auth_type == "bearer":
        return BearerAuth(token=str(data.get("token") or ""))
    if auth_type == "basic":
        return BasicAuth(
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
        )
    return NoAuth()


# ==================== Request ====================

@dataclass
class RequestModel:
    """One HTTP request definition.

    Header rows keep insertion order and may contain blanks or duplicate
    keys; they are filtered only when effective headers are computed.
    Stored copies (collection entries, history snapshots) never share a
    header list with the live editor request.
    """

    method: HttpMethod = HttpMethod.GET
    url: str = ""
    headers: list[Header] = field(default_factory=lambda: [Header()])
    body: str = ""
    scan_type: ScanType = ScanType.ALL
    auth: Auth = field(default_factory=NoAuth)

    id: int | None = None
    name: str | None = None
    collection_id: int | None = None

    @classmethod
    def blank(cls) -> RequestModel:
        """Request state used for File > New Request."""
        return cls()

    @classmethod
    def initial(cls) -> RequestModel:
        """Request state shown when the editor first opens."""
        return cls(url=DEFAULT_URL)

    def copy(self, **changes: Any) -> RequestModel:
        """Independent copy; header rows are immutable so a new list suffices."""
        copied = replace(self, headers=list(self.headers))
        if changes:
            copied = replace(copied, **changes)
        return copied

    # ==================== Header Editing ====================

    def add_header(self, key: str = "", value: str = "") -> None:
        self.headers = [*self.headers, Header(key, value)]

    def update_header(self, index: int, key: str | None = None, value: str | None = None) -> None:
        """Replace one header row's key and/or value."""
        current = self.headers[index]
        updated = replace(
            current,
            key=current.key if key is None else key,
            value=current.value if value is None else value,
        )
        self.headers = [updated if i == index else h for i, h in enumerate(self.headers)]

    def remove_header(self, index: int) -> None:
        self.headers = [h for i, h in enumerate(self.headers) if i != index]

    # ==================== Display ====================

    @property
    def display_name(self) -> str:
        return self.name or display_name(self.url)

    # ==================== Serialization ====================

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        data: dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        if self.name is not None:
            data["name"] = self.name
        data.update({
            "method": self.method.value,
            "url": self.url,
            "headers": [h.to_dict() for h in self.headers],
            "body": self.body,
            "scanType": self.scan_type.value,
        })
        if self.collection_id is not None:
            data["collectionId"] = self.collection_id
        data["auth"] = self.auth.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestModel:
        """Build from the persisted JSON shape, filling in defaults."""
        raw_headers = data.get("headers")
        headers = (
            [Header.from_dict(h) for h in raw_headers]
            if isinstance(raw_headers, list)
            else [Header()]
        )
        name = data.get("name")
        return cls(
            method=HttpMethod.parse(data.get("method", "GET")),
            url=str(data.get("url") or ""),
            headers=headers,
            body=str(data.get("body") or ""),
            scan_type=ScanType.parse(data.get("scanType", "all")),
            auth=auth_from_dict(data.get("auth")),
            id=_optional_int(data.get("id")),
            name=None if name is None else str(name),
            collection_id=_optional_int(data.get("collectionId")),
        )


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def display_name(url: str) -> str:
    """Short label for a request: the last path segment of its URL."""
    if not url:
        return UNTITLED_REQUEST

    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        segments = [s for s in parsed.path.split("/") if s]
    else:
        # Relative or template URL
        segments = [s for s in url.split("/") if s]

    return segments[-1] if segments else url

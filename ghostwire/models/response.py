"""Response models.

Responses are transient: one is built per send and replaced wholesale on
the next one. They are never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ParsedOutput:
    """Fields recovered from the executor's verbose output."""

    status: str = "Done"
    time: str = "N/A"
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass
class ResponseModel:
    """What the workbench renders after a send."""

    status: str
    time: str
    size: str
    headers: dict[str, str] = field(default_factory=dict)
    request_headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    error: str | None = None
    full_output: str = ""

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedOutput,
        request_headers: dict[str, str],
        full_output: str,
    ) -> ResponseModel:
        """Build a successful response from parsed executor output."""
        return cls(
            status=parsed.status or "Done",
            time=parsed.time or "N/A",
            size=body_size(parsed.body),
            headers=dict(parsed.headers),
            request_headers=dict(request_headers),
            body=parsed.body,
            full_output=full_output,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.status,
            "time": self.time,
            "size": self.size,
            "headers": self.headers,
            "requestHeaders": self.request_headers,
            "body": self.body,
            "fullOutput": self.full_output,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


def body_size(body: str) -> str:
    """UTF-8 byte length formatted for display."""
    return f"{len(body.encode('utf-8'))} bytes"

"""Verbose Output Parser.

Parses the executor's verbose text into status, time, headers and body.

Expected layout (loosely; anything unrecognised is ignored)::

    Status: 200 OK
    Time: 120ms
    Headers:
    Content-Type: application/json
    Body:
    {"a":1}
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ghostwire.models import ParsedOutput

STATUS_PREFIX = "Status:"
TIME_PREFIX = "Time:"
HEADERS_MARKER = "Headers:"
BODY_MARKER = "Body:"


class ParserState(str, Enum):
    """Section the parser is currently reading."""

    SCANNING = "scanning"
    IN_HEADERS = "in_headers"
    IN_BODY = "in_body"


def parse_verbose_output(output: Any) -> ParsedOutput:
    """Parse verbose executor output in a single pass.

    Never raises. Missing sections leave their defaults in place:
    status ``Done``, time ``N/A``, no headers, empty body.
    """
    result = ParsedOutput()
    if not isinstance(output, str):
        return result

    state = ParserState.SCANNING
    body_parts: list[str] = []

    for line in output.split("\n"):
        if line.startswith(STATUS_PREFIX):
            result.status = line[len(STATUS_PREFIX):].strip()
        if line.startswith(TIME_PREFIX):
            result.time = line[len(TIME_PREFIX):].strip()

        marker = line.strip()
        if marker == HEADERS_MARKER:
            state = ParserState.IN_HEADERS
            continue
        if marker == BODY_MARKER:
            state = ParserState.IN_BODY
            continue

        if state == ParserState.IN_HEADERS:
            if ":" in line:
                key, _, value = line.strip().partition(":")
                result.headers[key.strip()] = value.strip()
        elif state == ParserState.IN_BODY:
            body_parts.append(line + "\n")

    result.body = "".join(body_parts).rstrip()
    return result

"""Executor Argument Synthesis.

Turns a request definition into the token list handed to ``httpcli``.
The tokens are joined with spaces and interpreted by a shell, so the
quoting below is part of the contract with the executor: URL and header
tokens are wrapped in double quotes, the body in single quotes. Nothing
inside the quotes is escaped.
"""

from __future__ import annotations

import base64

from ghostwire.models import BasicAuth, BearerAuth, HttpMethod, RequestModel

AUTHORIZATION = "Authorization"


def effective_headers(request: RequestModel) -> dict[str, str]:
    """Merge explicit header rows with auth-derived headers.

    Rows with an empty key or value are skipped. Auth is applied last so
    it always wins over an explicit ``Authorization`` row.
    """
    headers: dict[str, str] = {}
    for header in request.headers:
        if header.is_complete:
            headers[header.key] = header.value

    auth = request.auth
    if isinstance(auth, BearerAuth) and auth.token:
        headers[AUTHORIZATION] = f"Bearer {auth.token}"
    elif isinstance(auth, BasicAuth) and auth.username:
        credentials = f"{auth.username}:{auth.password or ''}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        headers[AUTHORIZATION] = f"Basic {encoded}"

    return headers


def serialize_headers(headers: dict[str, str]) -> str:
    """``key:value`` pairs joined by commas, unescaped."""
    return ",".join(f"{key}:{value}" for key, value in headers.items())


def build_arguments(request: RequestModel, scan: bool = False) -> list[str]:
    """Build the executor invocation tokens for a request.

    Verbose output (``-v``) is always requested; the output parser relies
    on it.
    """
    args = ["-url", f'"{request.url}"', "-X", request.method.value, "-v"]

    header_str = serialize_headers(effective_headers(request))
    if header_str:
        args.extend(["-H", f'"{header_str}"'])

    if request.body and request.method != HttpMethod.GET:
        args.extend(["-d", f"'{request.body}'"])

    if scan:
        args.extend(["-scan", "-scan-type", request.scan_type.value])

    return args

"""Postman Collection conversion.

Imports Postman v2.x collection documents into the flat internal
collection shape, and exports internal collections back out.

Import walks the folder tree depth-first. Each request becomes one
internal request whose name is the folder path joined with ``" / "``
plus the item's own name, e.g. ``"Users / Get User"``. Collection-level
``{{variables}}`` are substituted into URLs, headers and bodies; unknown
variables are left as written.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any, Iterator

from ghostwire.models import (
    BasicAuth,
    BearerAuth,
    Collection,
    Header,
    HttpMethod,
    RequestModel,
    ScanType,
    generate_id,
)

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_NAME = "Imported Postman Collection"
FOLDER_SEPARATOR = " / "
POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"


def is_postman_collection(document: Any) -> bool:
    """A dict with ``info`` and a list-valued ``item``."""
    return (
        isinstance(document, dict)
        and "info" in document
        and isinstance(document.get("item"), list)
    )


def build_variable_table(variables: Any) -> dict[str, str]:
    """Map collection variable keys to their values."""
    table: dict[str, str] = {}
    if not isinstance(variables, list):
        return table
    for variable in variables:
        if not isinstance(variable, dict):
            continue
        key = variable.get("key")
        if not key:
            continue
        table[str(key)] = _variable_text(variable.get("value"))
    return table


def _variable_text(value: Any) -> str:
    # JSON literals keep their JSON spelling
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def resolve_variables(value: Any, variables: dict[str, str]) -> Any:
    """Substitute every known ``{{key}}``. Non-strings pass through."""
    if not isinstance(value, str):
        return value
    resolved = value
    for key, replacement in variables.items():
        resolved = re.sub(
            r"\{\{" + re.escape(key) + r"\}\}",
            lambda _m: replacement,
            resolved,
        )
    return resolved


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _resolve_url(url: Any, variables: dict[str, str]) -> str:
    if isinstance(url, str):
        return resolve_variables(url, variables)
    if isinstance(url, dict) and url.get("raw"):
        return _as_text(resolve_variables(url["raw"], variables))
    return ""


def _convert_request(
    item: dict[str, Any],
    name: str,
    variables: dict[str, str],
    request_id: int,
    collection_id: int | None = None,
) -> RequestModel:
    request = item["request"]
    if isinstance(request, str):
        # Shorthand form: the request is just a URL
        request = {"url": request}
    elif not isinstance(request, dict):
        request = {}

    raw_headers = request.get("header")
    headers = [
        Header(
            key=_as_text(resolve_variables(h.get("key"), variables)),
            value=_as_text(resolve_variables(h.get("value"), variables)),
        )
        for h in (raw_headers if isinstance(raw_headers, list) else [])
        if isinstance(h, dict)
    ]

    body = request.get("body")
    raw_body = body.get("raw") if isinstance(body, dict) else None

    return RequestModel(
        id=request_id,
        name=name,
        method=HttpMethod.parse(request.get("method") or "GET"),
        url=_resolve_url(request.get("url"), variables),
        headers=headers or [Header()],
        body=_as_text(resolve_variables(raw_body, variables)) if raw_body else "",
        scan_type=ScanType.ALL,
        collection_id=collection_id,
    )


def iter_postman_items(
    items: list[Any],
    path_prefix: str = "",
) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield ``(full_name, item)`` for every request leaf under ``items``.

    Only list-valued ``item`` fields are descended into, so malformed
    trees terminate. Folders are tracked on an explicit stack, so nesting
    depth is not bounded by the interpreter's recursion limit.
    """
    stack = [(iter(items), path_prefix)]
    while stack:
        children, prefix = stack[-1]
        for item in children:
            if not isinstance(item, dict):
                continue
            name = _as_text(item.get("name"))
            if item.get("request"):
                yield prefix + name, item
            elif isinstance(item.get("item"), list):
                stack.append((iter(item["item"]), prefix + name + FOLDER_SEPARATOR))
                break
        else:
            stack.pop()


def convert_postman_to_internal(document: Any) -> Any:
    """Convert a Postman collection into a one-element list of Collections.

    Anything that is not recognisably a Postman document is returned
    unchanged; the caller decides whether it is a valid internal export.
    """
    if not is_postman_collection(document):
        return document

    variables = build_variable_table(document.get("variable"))
    collection_id = generate_id()
    requests = [
        _convert_request(
            item,
            name,
            variables,
            request_id=generate_id(),
            collection_id=collection_id,
        )
        for name, item in iter_postman_items(document["item"])
    ]

    info = document.get("info")
    name = info.get("name") if isinstance(info, dict) else None

    logger.info(f"Converted Postman collection with {len(requests)} requests")
    return [
        Collection(
            name=_as_text(name) or DEFAULT_COLLECTION_NAME,
            id=collection_id,
            requests=requests,
        )
    ]


# ==================== Export ====================

def _postman_auth(request: RequestModel) -> dict[str, Any] | None:
    auth = request.auth
    if isinstance(auth, BearerAuth):
        return {
            "type": "bearer",
            "bearer": [{"key": "token", "value": auth.token, "type": "string"}],
        }
    if isinstance(auth, BasicAuth):
        return {
            "type": "basic",
            "basic": [
                {"key": "username", "value": auth.username, "type": "string"},
                {"key": "password", "value": auth.password, "type": "string"},
            ],
        }
    return None


def _postman_item(request: RequestModel) -> dict[str, Any]:
    postman_request: dict[str, Any] = {
        "method": request.method.value,
        "header": [
            h.to_dict() for h in request.headers if h.key or h.value
        ],
        "url": {"raw": request.url},
    }
    if request.body:
        postman_request["body"] = {"mode": "raw", "raw": request.body}

    auth = _postman_auth(request)
    if auth:
        postman_request["auth"] = auth

    return {"name": request.display_name, "request": postman_request}


def export_postman(
    collections: list[Collection],
    name: str = "Ghostwire Collections",
) -> dict[str, Any]:
    """Build a Postman v2.1 document with one folder per collection."""
    return {
        "info": {
            "_postman_id": str(uuid.uuid4()),
            "name": name,
            "schema": POSTMAN_SCHEMA,
        },
        "item": [
            {
                "name": collection.name,
                "item": [_postman_item(r) for r in collection.requests],
            }
            for collection in collections
        ],
        "variable": [],
    }

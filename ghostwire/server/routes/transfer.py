"""Import/Export API Routes.

Import accepts either an internal collections export or a Postman
collection. Export downloads every collection as JSON.
"""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Request
from fastapi.responses import Response
from pydantic import BaseModel

from ghostwire.engine import EXPORT_FILENAME
from ghostwire.server.state import get_workbench

logger = logging.getLogger(__name__)
router = APIRouter()


class ImportFileRequest(BaseModel):
    """Path chosen in the file dialog; null when the dialog was cancelled."""

    path: str | None = None


@router.post("/import")
async def import_collections(request: Request):
    """Import collections from the raw JSON request body."""
    content = await request.body()
    result = get_workbench().import_content(content)
    return result.to_dict()


@router.post("/import-file")
async def import_collections_file(payload: ImportFileRequest):
    """Import collections from a file on disk."""
    result = get_workbench().import_file(payload.path)
    return result.to_dict()


@router.get("/export")
async def export_collections(format: Literal["internal", "postman"] = "internal"):
    """Download all collections as pretty-printed JSON."""
    content = get_workbench().export_collections(format=format)
    return Response(
        content=content.encode("utf-8"),
        media_type="application/json; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )

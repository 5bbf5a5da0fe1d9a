"""History API Routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ghostwire.server.routes.schemas import request_to_dict
from ghostwire.server.state import get_workbench

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def list_history():
    """Sent requests, newest first."""
    return {"history": [request_to_dict(r) for r in get_workbench().store.history]}


@router.delete("")
async def clear_history():
    get_workbench().store.clear_history()
    return {"success": True, "message": "History cleared"}


@router.post("/{request_id}/open")
async def open_history_entry(request_id: int):
    """Load a history entry into the editor."""
    opened = get_workbench().open_history_entry(request_id)
    if opened is None:
        raise HTTPException(status_code=404, detail="History entry not found")
    return request_to_dict(opened)

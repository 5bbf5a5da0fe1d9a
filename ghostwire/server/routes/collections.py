"""Collection API Routes.

CRUD for collections and the requests saved in them.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ghostwire.server.routes.schemas import NamePayload, request_to_dict
from ghostwire.server.state import get_workbench

logger = logging.getLogger(__name__)
router = APIRouter()


def _collection_to_dict(collection):
    data = collection.to_dict()
    data["requests"] = [request_to_dict(r) for r in collection.requests]
    return data


@router.get("")
async def list_collections():
    """List all collections with their requests."""
    return {
        "collections": [
            _collection_to_dict(c) for c in get_workbench().store.collections
        ]
    }


@router.post("", status_code=201)
async def create_collection(payload: NamePayload):
    """Create an empty collection."""
    try:
        collection = get_workbench().store.create_collection(payload.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _collection_to_dict(collection)


@router.patch("/{collection_id}")
async def rename_collection(collection_id: int, payload: NamePayload):
    """Rename a collection."""
    store = get_workbench().store
    try:
        renamed = store.rename_collection(collection_id, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not renamed:
        raise HTTPException(status_code=404, detail="Collection not found")
    return _collection_to_dict(store.get_collection(collection_id))


@router.delete("/{collection_id}")
async def delete_collection(collection_id: int):
    """Delete a collection and all its requests."""
    if not get_workbench().store.delete_collection(collection_id):
        raise HTTPException(status_code=404, detail="Collection not found")
    return {"success": True, "message": "Collection deleted"}


@router.post("/{collection_id}/requests", status_code=201)
async def save_request(collection_id: int, payload: NamePayload):
    """Save a copy of the editor request into a collection."""
    try:
        saved = get_workbench().save_to_collection(collection_id, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if saved is None:
        raise HTTPException(status_code=404, detail="Collection not found")
    return request_to_dict(saved)


@router.patch("/{collection_id}/requests/{request_id}")
async def rename_request(collection_id: int, request_id: int, payload: NamePayload):
    """Rename a saved request."""
    store = get_workbench().store
    try:
        renamed = store.rename_request(collection_id, request_id, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not renamed:
        raise HTTPException(status_code=404, detail="Request not found")
    return request_to_dict(store.find_request(collection_id, request_id))


@router.delete("/{collection_id}/requests/{request_id}")
async def delete_request(collection_id: int, request_id: int):
    """Remove a request from a collection."""
    if not get_workbench().store.delete_request(collection_id, request_id):
        raise HTTPException(status_code=404, detail="Request not found")
    return {"success": True, "message": "Request deleted"}


@router.post("/{collection_id}/requests/{request_id}/open")
async def open_request(collection_id: int, request_id: int):
    """Load a saved request into the editor."""
    opened = get_workbench().open_collection_request(collection_id, request_id)
    if opened is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return request_to_dict(opened)

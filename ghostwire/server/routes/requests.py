"""Editor Request Routes.

Read and replace the live editor request, preview the executor tokens
and dispatch sends and scans.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ghostwire.server.routes.schemas import RequestPayload, request_to_dict
from ghostwire.server.state import get_workbench

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_request():
    """Get the editor request."""
    return request_to_dict(get_workbench().request)


@router.put("")
async def put_request(payload: RequestPayload):
    """Replace the editor request."""
    workbench = get_workbench()
    return request_to_dict(workbench.set_request(payload.to_model()))


@router.post("/new")
async def new_request():
    """Reset the editor to a blank request."""
    return request_to_dict(get_workbench().new_request())


@router.get("/arguments")
async def get_arguments(scan: bool = False):
    """Preview the executor tokens for the editor request."""
    return {"args": get_workbench().arguments(scan=scan)}


async def _dispatch(scan: bool):
    workbench = get_workbench()
    if workbench.in_flight:
        raise HTTPException(status_code=409, detail="A request is already in flight")
    response = await workbench.send(scan=scan)
    return response.to_dict()


@router.post("/send")
async def send_request():
    """Send the editor request."""
    return await _dispatch(scan=False)


@router.post("/scan")
async def scan_request():
    """Send the editor request as a vulnerability scan."""
    return await _dispatch(scan=True)

# src/chirper/domains/chirps/api/crud.py
"""
Chirp CRUD API Routes

JSON create, read, update, delete operations for chirps.
Domain errors are translated to the standard error envelope by the
app-level exception handlers.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ....api.dependencies import get_chirp_service
from ....auth import current_user_id
from ..services import ChirpService

logger = logging.getLogger(__name__)

router = APIRouter()


class ChirpPayload(BaseModel):
    """Request body for create and update."""
    message: Optional[Any] = None


@router.get("")
def list_chirps(
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """List every chirp, newest first."""
    feed = service.list(user_id)
    return JSONResponse({
        "status": "ok",
        "chirps": [item.to_dict() for item in feed],
        "count": len(feed),
    })


@router.post("")
def create_chirp(
    payload: ChirpPayload,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Create a new chirp as the current user."""
    chirp = service.create(user_id, payload.message)
    return JSONResponse({"status": "ok", "chirp": chirp.to_dict()}, status_code=201)


@router.get("/{chirp_id}")
def get_chirp(
    chirp_id: int,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Get a specific chirp by ID."""
    chirp = service.get(user_id, chirp_id)
    return JSONResponse({"status": "ok", "chirp": chirp.to_dict()})


@router.put("/{chirp_id}")
@router.patch("/{chirp_id}")
def update_chirp(
    chirp_id: int,
    payload: ChirpPayload,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Update the message of one of the current user's chirps."""
    chirp = service.update(user_id, chirp_id, payload.message)
    return JSONResponse({"status": "ok", "chirp": chirp.to_dict()})


@router.delete("/{chirp_id}", status_code=204)
def delete_chirp(
    chirp_id: int,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Delete one of the current user's chirps."""
    service.delete(user_id, chirp_id)
    return Response(status_code=204)

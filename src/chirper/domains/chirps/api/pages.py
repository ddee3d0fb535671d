# src/chirper/domains/chirps/api/pages.py
"""
Chirp HTML pages.

Server-rendered index (form + feed) and edit pages. Successful writes
redirect back to the index; a rejected message re-renders the form with the
field error.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from ....api.dependencies import get_chirp_service, templates
from ....auth import current_user_id
from ....core.errors import ValidationError
from ..services import ChirpService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chirps", tags=["chirps-pages"])


def _back_to_index() -> RedirectResponse:
    return RedirectResponse(url="/chirps", status_code=303)


def _render_index(request: Request, service: ChirpService, user_id: int, **context):
    return templates.TemplateResponse(
        request,
        "chirps/index.html",
        {
            "chirps": service.list(user_id),
            "user_id": user_id,
            "errors": context.pop("errors", {}),
            "old_message": context.pop("old_message", ""),
        },
        status_code=context.pop("status_code", 200),
    )


@router.get("")
def index(
    request: Request,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Show the chirp form and every chirp."""
    return _render_index(request, service, user_id)


@router.post("")
def store(
    request: Request,
    message: str = Form(""),
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Create a chirp from the index form."""
    try:
        service.create(user_id, message)
    except ValidationError as e:
        return _render_index(
            request,
            service,
            user_id,
            errors={e.field: e.message},
            old_message=message,
            status_code=422,
        )
    return _back_to_index()


@router.get("/{chirp_id}/edit")
def edit(
    request: Request,
    chirp_id: int,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Show the edit form for one chirp."""
    chirp = service.get_owned(user_id, chirp_id)
    return templates.TemplateResponse(
        request,
        "chirps/edit.html",
        {"chirp": chirp, "errors": {}, "message": chirp.message},
    )


@router.post("/{chirp_id}/edit")
def edit_submit(
    request: Request,
    chirp_id: int,
    message: str = Form(""),
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Apply the edit form."""
    try:
        service.update(user_id, chirp_id, message)
    except ValidationError as e:
        chirp = service.get_owned(user_id, chirp_id)
        return templates.TemplateResponse(
            request,
            "chirps/edit.html",
            {"chirp": chirp, "errors": {e.field: e.message}, "message": message},
            status_code=422,
        )
    return _back_to_index()


@router.put("/{chirp_id}")
def update(
    chirp_id: int,
    message: str = Form(""),
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Form-encoded update (used by scripted clients)."""
    service.update(user_id, chirp_id, message)
    return _back_to_index()


@router.post("/{chirp_id}/delete")
@router.delete("/{chirp_id}")
def destroy(
    chirp_id: int,
    user_id: int = Depends(current_user_id),
    service: ChirpService = Depends(get_chirp_service),
):
    """Delete a chirp and go back to the index."""
    service.delete(user_id, chirp_id)
    return _back_to_index()

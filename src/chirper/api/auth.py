# src/chirper/api/auth.py
"""
Authentication Routes

Login, registration and logout pages backed by the cookie session in
``chirper.auth``.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from ..auth import (
    SESSION_COOKIE,
    create_session,
    destroy_session,
    hash_password,
    verify_password,
)
from ..core.errors import ValidationError
from ..core.ports import UserStore
from .dependencies import get_container, get_user_store, templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

PASSWORD_MIN_LENGTH = 8


def _safe_next(next_url: str) -> str:
    """Only allow local redirects."""
    if not next_url or not next_url.startswith("/") or next_url.startswith("//"):
        return "/chirps"
    return next_url


def _login_response(request: Request, user_id: int, next_url: str) -> RedirectResponse:
    token = create_session(user_id, request.headers.get("user-agent", ""))
    config = get_container(request).config
    response = RedirectResponse(url=_safe_next(next_url), status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        max_age=60 * 60 * config.session_duration_hours,
        samesite="lax",
    )
    return response


@router.get("/login")
def login_page(request: Request, next: str = "/chirps"):
    """Show login page."""
    return templates.TemplateResponse(
        request, "auth/login.html", {"error": None, "next": next, "email": ""}
    )


@router.post("/login")
def do_login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    next: str = Form("/chirps"),
    users: UserStore = Depends(get_user_store),
):
    """Process login."""
    user = users.find_by_email(email.strip())
    if user is None or not verify_password(password, user.password_hash):
        logger.info(f"Failed login for {email}")
        return templates.TemplateResponse(
            request,
            "auth/login.html",
            {"error": "These credentials do not match our records.", "next": next, "email": email},
            status_code=422,
        )
    return _login_response(request, user.id, next)


@router.get("/register")
def register_page(request: Request):
    """Show registration page."""
    return templates.TemplateResponse(
        request, "auth/register.html", {"errors": {}, "name": "", "email": ""}
    )


@router.post("/register")
def do_register(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    users: UserStore = Depends(get_user_store),
):
    """Create an account and log it in."""
    name, email = name.strip(), email.strip()
    errors = {}
    if not name:
        errors["name"] = "The name field is required."
    if "@" not in email:
        errors["email"] = "The email must be a valid email address."
    if len(password) < PASSWORD_MIN_LENGTH:
        errors["password"] = f"The password must be at least {PASSWORD_MIN_LENGTH} characters."

    if not errors:
        try:
            user = users.create(name, email, hash_password(password))
        except ValidationError as e:
            errors[e.field] = e.message
        else:
            logger.info(f"Registered user {user.id}")
            return _login_response(request, user.id, "/chirps")

    return templates.TemplateResponse(
        request,
        "auth/register.html",
        {"errors": errors, "name": name, "email": email},
        status_code=422,
    )


@router.post("/logout")
def logout(request: Request):
    """Logout and destroy session."""
    destroy_session(request.cookies.get(SESSION_COOKIE))
    response = RedirectResponse(url="/login", status_code=303)
    response.delete_cookie(SESSION_COOKIE)
    return response

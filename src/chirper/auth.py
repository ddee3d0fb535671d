"""Authentication middleware and session handling for Chirper."""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

SESSION_COOKIE = "chirper_session"
SESSION_DURATION_HOURS = 24 * 7  # 1 week

# Session storage (process memory)
_sessions: Dict[str, dict] = {}


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Hash password with a per-user salt. Returns ``salt$hexdigest``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.sha256(f"{salt}{password}".encode()).hexdigest()
    return f"{salt}${digest}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a ``salt$hexdigest`` hash."""
    if not stored_hash or "$" not in stored_hash:
        return False
    salt, _ = stored_hash.split("$", 1)
    return hmac.compare_digest(hash_password(password, salt), stored_hash)


def create_session(user_id: int, user_agent: str = "") -> str:
    """Create a new session for a user and return its token."""
    token = secrets.token_urlsafe(32)
    now = datetime.now()
    _sessions[token] = {
        "user_id": user_id,
        "created": now,
        "user_agent": user_agent,
        "last_active": now,
    }
    logger.info(f"Session created for user {user_id}")
    return token


def validate_session(token: Optional[str], duration_hours: int = SESSION_DURATION_HOURS) -> Optional[int]:
    """Return the session's user id, or None if missing or expired."""
    if not token:
        return None

    session = _sessions.get(token)
    if session is None:
        return None

    expiry = session["created"] + timedelta(hours=duration_hours)
    if datetime.now() > expiry:
        _sessions.pop(token, None)
        return None

    session["last_active"] = datetime.now()
    return session["user_id"]


def destroy_session(token: Optional[str]):
    """Logout - destroy session."""
    if token:
        _sessions.pop(token, None)


# Public routes that don't need auth
PUBLIC_ROUTES = [
    "/login",
    "/register",
    "/static",
    "/health",
    "/favicon.ico",
]


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie to ``request.state.user_id``."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        request.state.user_id = None

        # Allow public routes
        for route in PUBLIC_ROUTES:
            if path.startswith(route):
                return await call_next(request)

        config = request.app.state.container.config
        user_id = validate_session(
            request.cookies.get(SESSION_COOKIE),
            duration_hours=config.session_duration_hours,
        )

        if user_id is None:
            # API routes return 401
            if path.startswith("/api/"):
                return JSONResponse(
                    {
                        "success": False,
                        "error": {"code": "AUTH_REQUIRED", "message": "Unauthenticated."},
                    },
                    status_code=401,
                )
            # Web routes redirect to login
            return RedirectResponse(url=f"/login?next={path}", status_code=302)

        request.state.user_id = user_id
        return await call_next(request)


def current_user_id(request: Request) -> int:
    """FastAPI dependency: the authenticated user's id."""
    return request.state.user_id

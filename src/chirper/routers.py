"""
Router Registry - Centralized router registration for the FastAPI app.
"""

from fastapi import FastAPI


def register_routers(app: FastAPI) -> None:
    """
    Register all routers with the FastAPI application.

    1. Domain routers (chirps JSON API and pages)
    2. Infrastructure routers (auth, notifications)
    """

    # =========================================================================
    # DOMAIN ROUTERS
    # =========================================================================

    from .domains.chirps.api import router as chirps_api_router
    from .domains.chirps.api import pages_router as chirps_pages_router

    app.include_router(chirps_api_router)
    app.include_router(chirps_pages_router)

    # =========================================================================
    # API ROUTERS
    # =========================================================================

    from .api.auth import router as auth_router
    from .api.notifications import router as notifications_router

    app.include_router(auth_router)
    app.include_router(notifications_router)

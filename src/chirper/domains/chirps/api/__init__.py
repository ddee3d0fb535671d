# src/chirper/domains/chirps/api/__init__.py
"""
Chirps Domain API Routes

- router: JSON API mounted at /api/chirps
- pages_router: server-rendered pages at /chirps
"""

from fastapi import APIRouter

from .crud import router as crud_router
from .pages import router as pages_router

# Create the aggregated chirps router
router = APIRouter(tags=["chirps"])

router.include_router(crud_router, prefix="/api/chirps", tags=["chirps-crud"])

__all__ = ["router", "pages_router"]

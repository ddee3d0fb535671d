# src/chirper/api/notifications.py
"""
Notification API

REST endpoints for the current user's stored notifications:
- GET /api/notifications - List notifications
- GET /api/notifications/unread-count - Badge count for UI
- PATCH /api/notifications/{id}/read - Mark as read
- POST /api/notifications/read-all - Mark everything read
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ..auth import current_user_id
from ..core.models import NotificationRecord
from ..core.ports import NotificationsRepository
from .dependencies import get_notifications_repository
from .responses import APIException, ErrorCode

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class NotificationResponse(BaseModel):
    """Notification response model."""
    id: str
    type: str
    data: Dict[str, Any]
    read: bool
    created_at: Optional[str] = None
    read_at: Optional[str] = None

    @classmethod
    def from_record(cls, n: NotificationRecord) -> "NotificationResponse":
        return cls(
            id=n.id,
            type=n.notification_type,
            data=n.data,
            read=n.read,
            created_at=n.created_at.isoformat() if n.created_at else None,
            read_at=n.read_at.isoformat() if n.read_at else None,
        )


class UnreadCountResponse(BaseModel):
    """Unread count response."""
    count: int


class MarkReadResponse(BaseModel):
    success: bool
    notification_id: str


class MarkAllReadResponse(BaseModel):
    success: bool
    count: int


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    unread_only: bool = Query(False, description="Only show unread notifications"),
    limit: int = Query(20, ge=1, le=100, description="Maximum notifications to return"),
    user_id: int = Depends(current_user_id),
    repo: NotificationsRepository = Depends(get_notifications_repository),
):
    """List the current user's notifications, newest first."""
    records = repo.list_for_user(user_id, unread_only=unread_only, limit=limit)
    return [NotificationResponse.from_record(r) for r in records]


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    user_id: int = Depends(current_user_id),
    repo: NotificationsRepository = Depends(get_notifications_repository),
):
    """Get unread notification count for the badge."""
    return UnreadCountResponse(count=repo.unread_count(user_id))


@router.patch("/{notification_id}/read", response_model=MarkReadResponse)
def mark_notification_read(
    notification_id: str,
    user_id: int = Depends(current_user_id),
    repo: NotificationsRepository = Depends(get_notifications_repository),
):
    """Mark one notification as read."""
    if not repo.mark_read(user_id, notification_id):
        raise APIException(
            error_code=ErrorCode.NOT_FOUND,
            message="Notification not found",
            detail=f"No notification with identifier: {notification_id}",
        )
    return MarkReadResponse(success=True, notification_id=notification_id)


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    user_id: int = Depends(current_user_id),
    repo: NotificationsRepository = Depends(get_notifications_repository),
):
    """Mark every notification of the current user as read."""
    return MarkAllReadResponse(success=True, count=repo.mark_all_read(user_id))

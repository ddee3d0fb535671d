# src/chirper/core/models.py
"""
Domain models for Chirper.

Pure dataclasses representing the core entities. They are storage-agnostic
and used by the service layer, the adapters and the web surface alike.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

MESSAGE_MAX_LENGTH = 255
NOTIFICATION_EXCERPT_LENGTH = 50


def utcnow() -> datetime:
    """Timezone-aware current time used for store-assigned timestamps."""
    return datetime.now(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp (ISO string or datetime) into a datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None


@dataclass
class User:
    """User identity. Owned and managed by the auth layer."""
    id: int
    name: str
    email: str
    password_hash: str = field(default="", repr=False)
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class Chirp:
    """A short text post owned by exactly one user."""
    id: int
    user_id: int
    message: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def edited(self) -> bool:
        return (
            self.created_at is not None
            and self.updated_at is not None
            and self.updated_at != self.created_at
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "edited": self.edited,
        }


@dataclass(frozen=True)
class NewChirp:
    """
    Notification telling one recipient that someone else chirped.

    Carries everything a channel needs to render it: a subject line,
    a greeting, a short excerpt of the message and where to go next.
    """
    chirp: Chirp
    author_name: str
    action_url: str = "/chirps"

    notification_type = "new_chirp"

    @property
    def subject(self) -> str:
        return f"New Chirp from {self.author_name}"

    @property
    def greeting(self) -> str:
        return f"New Chirp from {self.author_name}"

    @property
    def excerpt(self) -> str:
        message = self.chirp.message
        if len(message) <= NOTIFICATION_EXCERPT_LENGTH:
            return message
        return message[:NOTIFICATION_EXCERPT_LENGTH].rstrip() + "..."

    def to_payload(self) -> Dict[str, Any]:
        """Serializable payload handed to notification channels."""
        return {
            "chirp_id": self.chirp.id,
            "author_id": self.chirp.user_id,
            "author_name": self.author_name,
            "subject": self.subject,
            "greeting": self.greeting,
            "excerpt": self.excerpt,
            "action_url": self.action_url,
        }


@dataclass
class NotificationRecord:
    """A delivered notification as stored for its recipient."""
    id: str
    user_id: int
    notification_type: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    read_at: Optional[datetime] = None

    @property
    def read(self) -> bool:
        return self.read_at is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.notification_type,
            "data": self.data,
            "read": self.read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "read_at": self.read_at.isoformat() if self.read_at else None,
        }

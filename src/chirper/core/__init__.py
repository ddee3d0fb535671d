"""
Core domain layer - entities, events, errors and port interfaces.

Following Ports and Adapters (Hexagonal Architecture):
- Ports are the interfaces that define how the domain interacts with the outside world
- Adapters (``chirper.adapters``) are the concrete implementations of those ports
"""

from .errors import (
    ChirperError,
    ValidationError,
    NotFoundError,
    ForbiddenError,
    StoreError,
    DeliveryError,
)
from .events import ChirpCreated, EventDispatcher
from .models import (
    MESSAGE_MAX_LENGTH,
    User,
    Chirp,
    NewChirp,
    NotificationRecord,
)
from .ports import (
    ChirpStore,
    UserStore,
    NotificationsRepository,
    NotificationChannel,
)

__all__ = [
    # Errors
    "ChirperError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "StoreError",
    "DeliveryError",
    # Events
    "ChirpCreated",
    "EventDispatcher",
    # Models
    "MESSAGE_MAX_LENGTH",
    "User",
    "Chirp",
    "NewChirp",
    "NotificationRecord",
    # Ports
    "ChirpStore",
    "UserStore",
    "NotificationsRepository",
    "NotificationChannel",
]

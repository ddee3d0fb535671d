"""
Chirps Domain Services

Business logic for the chirp lifecycle and notification fan-out.
"""

from .chirp_service import ChirpService, validate_message
from .feed import ChirpFeedItem, build_feed
from .notification_dispatcher import FanOutReport, NotificationDispatcher

__all__ = [
    "ChirpService",
    "validate_message",
    "ChirpFeedItem",
    "build_feed",
    "FanOutReport",
    "NotificationDispatcher",
]

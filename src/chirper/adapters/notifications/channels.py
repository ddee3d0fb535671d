# src/chirper/adapters/notifications/channels.py
"""
Notification Channels

Delivery targets for NewChirp notifications:
- DatabaseNotificationChannel: stores one row per recipient, read back by
  the /api/notifications endpoints
- LogNotificationChannel: writes the notification to the log only
"""

import logging
import uuid

from ...core.errors import DeliveryError, StoreError
from ...core.models import NewChirp, NotificationRecord, utcnow
from ...core.ports import NotificationChannel, NotificationsRepository

logger = logging.getLogger(__name__)


class DatabaseNotificationChannel(NotificationChannel):
    """Persist each notification for its recipient."""

    name = "database"

    def __init__(self, repository: NotificationsRepository):
        self._repository = repository

    def deliver(self, recipient_id: int, notification: NewChirp) -> bool:
        record = NotificationRecord(
            id=str(uuid.uuid4()),
            user_id=recipient_id,
            notification_type=notification.notification_type,
            data=notification.to_payload(),
            created_at=utcnow(),
        )
        try:
            self._repository.insert(record)
        except StoreError as e:
            raise DeliveryError(recipient_id, str(e)) from e
        logger.debug(f"Stored {record.notification_type} notification {record.id} for user {recipient_id}")
        return True


class LogNotificationChannel(NotificationChannel):
    """Log notifications instead of storing them."""

    name = "log"

    def deliver(self, recipient_id: int, notification: NewChirp) -> bool:
        logger.info(
            f"[notify user {recipient_id}] {notification.subject}: "
            f"{notification.excerpt} ({notification.action_url})"
        )
        return True

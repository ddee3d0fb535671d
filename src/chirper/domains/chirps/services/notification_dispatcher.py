# src/chirper/domains/chirps/services/notification_dispatcher.py
"""
New-chirp notification fan-out.

Subscribed to ``ChirpCreated``. For every user except the author, builds a
``NewChirp`` and hands it to the configured channel. One recipient's failure
is logged and skipped; it never stops the loop and never undoes the chirp.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ....core.errors import StoreError
from ....core.events import ChirpCreated
from ....core.models import NewChirp
from ....core.ports import ChirpStore, NotificationChannel, UserStore
from ..constants import UNKNOWN_AUTHOR

logger = logging.getLogger(__name__)


@dataclass
class FanOutReport:
    """Outcome of one fan-out."""
    chirp_id: int
    delivered: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    @property
    def recipients(self) -> List[int]:
        return self.delivered + self.failed


class NotificationDispatcher:
    """Sends NewChirp notifications when a chirp is created."""

    def __init__(
        self,
        chirp_store: ChirpStore,
        user_store: UserStore,
        channel: NotificationChannel,
    ):
        self._chirps = chirp_store
        self._users = user_store
        self._channel = channel

    def handle(self, event: ChirpCreated) -> FanOutReport:
        chirp = event.chirp
        report = FanOutReport(chirp_id=chirp.id)

        try:
            recipients = self._chirps.list_users_except(chirp.user_id)
            author = self._users.get(chirp.user_id)
        except StoreError:
            logger.exception(f"Could not resolve recipients for chirp {chirp.id}; no notifications sent")
            return report

        if not recipients:
            logger.debug(f"Chirp {chirp.id}: no other users to notify")
            return report

        notification = NewChirp(
            chirp=chirp,
            author_name=author.name if author else UNKNOWN_AUTHOR,
        )

        for recipient in recipients:
            # Authors are never notified of their own chirps
            if recipient.id == chirp.user_id:
                continue
            try:
                delivered = self._channel.deliver(recipient.id, notification)
            except Exception:
                logger.exception(
                    f"Delivery of chirp {chirp.id} to user {recipient.id} via {self._channel.name} failed"
                )
                report.failed.append(recipient.id)
                continue

            if delivered:
                report.delivered.append(recipient.id)
            else:
                logger.warning(
                    f"Channel {self._channel.name} refused chirp {chirp.id} for user {recipient.id}"
                )
                report.failed.append(recipient.id)

        logger.info(
            f"Chirp {chirp.id} fan-out: {len(report.delivered)} delivered, {len(report.failed)} failed"
        )
        return report

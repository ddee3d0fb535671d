# src/chirper/domains/chirps/services/chirp_service.py
"""
Chirp Service

Business logic for the chirp lifecycle: validate, authorize, persist, and
publish ``ChirpCreated`` after a successful create.

Every operation takes the acting user's id as supplied by the session layer.
Validation and ownership checks run before any write, so a rejected call
never leaves partial state behind.
"""

import logging
from typing import Any, List, Optional

from ....core.errors import ForbiddenError, NotFoundError, ValidationError
from ....core.events import ChirpCreated, EventDispatcher
from ....core.models import MESSAGE_MAX_LENGTH, Chirp
from ....core.ports import ChirpStore, UserStore
from ..constants import MESSAGE_NOT_STRING, MESSAGE_REQUIRED, MESSAGE_TOO_LONG
from ..policy import can_mutate
from .feed import ChirpFeedItem, build_feed

logger = logging.getLogger(__name__)


def validate_message(message: Any, max_length: int = MESSAGE_MAX_LENGTH) -> str:
    """
    Check a chirp message and return it trimmed.

    Raises:
        ValidationError: if the message is missing, blank or too long
    """
    if message is None:
        raise ValidationError("message", MESSAGE_REQUIRED)
    if not isinstance(message, str):
        raise ValidationError("message", MESSAGE_NOT_STRING)

    message = message.strip()
    if not message:
        raise ValidationError("message", MESSAGE_REQUIRED)
    if len(message) > max_length:
        raise ValidationError("message", MESSAGE_TOO_LONG.format(max_length=max_length))
    return message


class ChirpService:
    """
    Chirp lifecycle orchestration.

    Usage:
        service = ChirpService(chirp_store, user_store, events)

        chirp = service.create(user.id, "Hello")
        service.update(user.id, chirp.id, "Hello, world")
        feed = service.list(user.id)
        service.delete(user.id, chirp.id)
    """

    def __init__(
        self,
        chirp_store: ChirpStore,
        user_store: UserStore,
        events: Optional[EventDispatcher] = None,
        max_length: int = MESSAGE_MAX_LENGTH,
    ):
        self._chirps = chirp_store
        self._users = user_store
        self._events = events or EventDispatcher()
        self._max_length = max_length

    @property
    def events(self) -> EventDispatcher:
        return self._events

    def create(self, acting_user_id: int, message: Any) -> Chirp:
        message = validate_message(message, self._max_length)

        chirp = self._chirps.insert(acting_user_id, message)
        logger.info(f"User {acting_user_id} created chirp {chirp.id}")

        self._events.dispatch(ChirpCreated(chirp=chirp))
        return chirp

    def get(self, acting_user_id: int, chirp_id: int) -> Chirp:
        chirp = self._chirps.find_by_id(chirp_id)
        if chirp is None:
            raise NotFoundError("Chirp", chirp_id)
        return chirp

    def get_owned(self, acting_user_id: int, chirp_id: int) -> Chirp:
        """Load a chirp the acting user may edit (the edit form)."""
        chirp = self.get(acting_user_id, chirp_id)
        if not can_mutate(acting_user_id, chirp):
            logger.warning(f"User {acting_user_id} denied edit form of chirp {chirp_id}")
            raise ForbiddenError()
        return chirp

    def update(self, acting_user_id: int, chirp_id: int, message: Any) -> Chirp:
        chirp = self.get(acting_user_id, chirp_id)
        message = validate_message(message, self._max_length)

        if not can_mutate(acting_user_id, chirp):
            logger.warning(f"User {acting_user_id} denied update of chirp {chirp_id}")
            raise ForbiddenError()

        updated = self._chirps.update(chirp_id, message)
        logger.info(f"User {acting_user_id} updated chirp {chirp_id}")
        return updated

    def delete(self, acting_user_id: int, chirp_id: int) -> None:
        chirp = self.get(acting_user_id, chirp_id)

        if not can_mutate(acting_user_id, chirp):
            logger.warning(f"User {acting_user_id} denied delete of chirp {chirp_id}")
            raise ForbiddenError()

        self._chirps.delete(chirp_id)
        logger.info(f"User {acting_user_id} deleted chirp {chirp_id}")

    def list(self, acting_user_id: int) -> List[ChirpFeedItem]:
        """All users' chirps, newest first, with author names."""
        chirps = self._chirps.list_all()
        authors = self._users.get_many({chirp.user_id for chirp in chirps})
        return build_feed(chirps, authors, viewer_id=acting_user_id)

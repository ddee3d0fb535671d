# src/chirper/core/ports.py
"""
Port Interfaces

Abstract interfaces the chirp core depends on. Concrete implementations
(adapters) live in ``chirper.adapters``:
- SQLite (local/default)
- Supabase (hosted)

Every store method raises ``StoreError`` when the backend fails.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .models import Chirp, NewChirp, NotificationRecord, User


class ChirpStore(ABC):
    """
    Abstract interface (Port) for chirp persistence.
    """

    # --- Create ---

    @abstractmethod
    def insert(self, user_id: int, message: str) -> Chirp:
        """
        Insert a new chirp owned by ``user_id``.

        Returns:
            The stored chirp with its id and timestamps assigned
        """
        pass

    # --- Read ---

    @abstractmethod
    def find_by_id(self, chirp_id: int) -> Optional[Chirp]:
        """Get a chirp by ID, or None if it does not exist."""
        pass

    @abstractmethod
    def list_all(self) -> List[Chirp]:
        """All chirps, newest first (ties broken by descending id)."""
        pass

    @abstractmethod
    def list_users_except(self, user_id: int) -> List[User]:
        """Every user other than ``user_id``."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored chirps."""
        pass

    # --- Update ---

    @abstractmethod
    def update(self, chirp_id: int, message: str) -> Chirp:
        """
        Replace a chirp's message and bump ``updated_at``.

        Returns:
            The updated chirp
        """
        pass

    # --- Delete ---

    @abstractmethod
    def delete(self, chirp_id: int) -> None:
        """Delete a chirp by ID."""
        pass


class UserStore(ABC):
    """
    Abstract interface (Port) for user identities.
    """

    @abstractmethod
    def create(self, name: str, email: str, password_hash: str) -> User:
        pass

    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email."""
        pass

    @abstractmethod
    def list_all(self) -> List[User]:
        pass

    def get_many(self, user_ids: Iterable[int]) -> List[User]:
        """Users for the given ids; ids without a user are skipped."""
        wanted = set(user_ids)
        return [user for user in self.list_all() if user.id in wanted]


class NotificationsRepository(ABC):
    """
    Abstract interface (Port) for stored notifications.
    """

    @abstractmethod
    def insert(self, record: NotificationRecord) -> str:
        """
        Insert a new notification.

        Returns:
            The ID of the created notification
        """
        pass

    @abstractmethod
    def list_for_user(
        self,
        user_id: int,
        unread_only: bool = False,
        limit: int = 20,
    ) -> List[NotificationRecord]:
        """Notifications addressed to ``user_id``, newest first."""
        pass

    @abstractmethod
    def unread_count(self, user_id: int) -> int:
        pass

    @abstractmethod
    def mark_read(self, user_id: int, notification_id: str) -> bool:
        """
        Mark one of the user's notifications as read.

        Returns:
            False if the user has no such notification
        """
        pass

    @abstractmethod
    def mark_all_read(self, user_id: int) -> int:
        """
        Mark all of the user's unread notifications as read.

        Returns:
            Number of notifications marked as read
        """
        pass


class NotificationChannel(ABC):
    """
    Where NewChirp notifications go.

    ``deliver`` returns True on success. A channel may also signal failure by
    returning False or raising; the dispatcher treats both the same way.
    """

    name: str = "channel"

    @abstractmethod
    def deliver(self, recipient_id: int, notification: NewChirp) -> bool:
        pass

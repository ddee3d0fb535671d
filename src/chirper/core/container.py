# src/chirper/core/container.py
"""
Dependency Injection Container

Central configuration for all dependencies in the application.
Switches between adapters (SQLite <-> Supabase, database <-> log channel)
without changing business logic, and wires event subscribers explicitly.

Usage:
    from chirper.core.container import Container

    container = Container(config)
    service = container.chirp_service()
"""

import logging
from typing import Optional

from ..config import ChirperConfig, get_config
from .events import ChirpCreated, EventDispatcher
from .ports import ChirpStore, NotificationChannel, NotificationsRepository, UserStore

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Provides cached factory methods for adapters and services.
    Configuration comes from ``ChirperConfig``.
    """

    def __init__(self, config: Optional[ChirperConfig] = None):
        self.config = config or get_config()

        # Cached instances
        self._chirp_store: Optional[ChirpStore] = None
        self._user_store: Optional[UserStore] = None
        self._notifications: Optional[NotificationsRepository] = None
        self._channel: Optional[NotificationChannel] = None
        self._events: Optional[EventDispatcher] = None
        self._chirp_service = None

        logger.info(
            f"Container initialized: db={self.config.database_backend}, "
            f"channel={self.config.notification_channel}"
        )

    # =============================================================================
    # DATABASE
    # =============================================================================

    def _supabase_client(self):
        from ..infrastructure.supabase_client import get_supabase_client
        return get_supabase_client(self.config.supabase_url or None, self.config.supabase_key or None)

    def chirp_store(self) -> ChirpStore:
        """Get the chirp store for the configured backend."""
        if self._chirp_store is None:
            backend = self.config.database_backend
            if backend == "sqlite":
                from ..adapters.database.sqlite import SQLiteChirpStore
                self._chirp_store = SQLiteChirpStore(self.config.database_path)
            elif backend == "supabase":
                from ..adapters.database.supabase import SupabaseChirpStore
                self._chirp_store = SupabaseChirpStore(self._supabase_client())
            else:
                raise ValueError(f"Unknown database backend: {backend}")
        return self._chirp_store

    def user_store(self) -> UserStore:
        """Get the user store for the configured backend."""
        if self._user_store is None:
            backend = self.config.database_backend
            if backend == "sqlite":
                from ..adapters.database.sqlite import SQLiteUserStore
                self._user_store = SQLiteUserStore(self.config.database_path)
            elif backend == "supabase":
                from ..adapters.database.supabase import SupabaseUserStore
                self._user_store = SupabaseUserStore(self._supabase_client())
            else:
                raise ValueError(f"Unknown database backend: {backend}")
        return self._user_store

    def notifications_repository(self) -> NotificationsRepository:
        """Get the notifications repository for the configured backend."""
        if self._notifications is None:
            backend = self.config.database_backend
            if backend == "sqlite":
                from ..adapters.database.sqlite import SQLiteNotificationsRepository
                self._notifications = SQLiteNotificationsRepository(self.config.database_path)
            elif backend == "supabase":
                from ..adapters.database.supabase import SupabaseNotificationsRepository
                self._notifications = SupabaseNotificationsRepository(self._supabase_client())
            else:
                raise ValueError(f"Unknown database backend: {backend}")
        return self._notifications

    # =============================================================================
    # NOTIFICATIONS
    # =============================================================================

    def notification_channel(self) -> NotificationChannel:
        """Get the channel NewChirp notifications are delivered through."""
        if self._channel is None:
            channel = self.config.notification_channel
            if channel == "database":
                from ..adapters.notifications import DatabaseNotificationChannel
                self._channel = DatabaseNotificationChannel(self.notifications_repository())
            elif channel == "log":
                from ..adapters.notifications import LogNotificationChannel
                self._channel = LogNotificationChannel()
            else:
                raise ValueError(f"Unknown notification channel: {channel}")
        return self._channel

    def events(self) -> EventDispatcher:
        """Get the event dispatcher with all subscribers registered."""
        if self._events is None:
            from ..domains.chirps.services import NotificationDispatcher

            events = EventDispatcher()
            dispatcher = NotificationDispatcher(
                self.chirp_store(),
                self.user_store(),
                self.notification_channel(),
            )
            events.subscribe(ChirpCreated, dispatcher.handle)
            self._events = events
        return self._events

    # =============================================================================
    # SERVICES
    # =============================================================================

    def chirp_service(self):
        """Get the chirp service."""
        if self._chirp_service is None:
            from ..domains.chirps.services import ChirpService
            self._chirp_service = ChirpService(
                self.chirp_store(),
                self.user_store(),
                self.events(),
                max_length=self.config.chirp_max_length,
            )
        return self._chirp_service

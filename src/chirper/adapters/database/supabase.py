# src/chirper/adapters/database/supabase.py
"""
Supabase Database Adapters

Implement the store ports on top of a Supabase (PostgREST) client.
Tables mirror the SQLite schema in ``chirper.db``; ids are bigint identity
columns assigned by Postgres.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ...core.errors import NotFoundError, StoreError, ValidationError
from ...core.models import Chirp, NotificationRecord, User, parse_datetime, utcnow
from ...core.ports import ChirpStore, NotificationsRepository, UserStore

logger = logging.getLogger(__name__)


class SupabaseAdapter:
    """Shared query execution for the Supabase adapters."""

    def __init__(self, client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance
        """
        self._client = client

    def _execute(self, query, action: str):
        """Run a PostgREST query, turning client failures into StoreError."""
        try:
            return query.execute()
        except Exception as e:
            logger.error(f"Supabase {action} failed: {e}")
            raise StoreError(f"Supabase {action} failed", e) from e


def _parse_user(row: Dict[str, Any]) -> User:
    return User(
        id=int(row["id"]),
        name=row.get("name", ""),
        email=row.get("email", ""),
        password_hash=row.get("password_hash") or "",
        created_at=parse_datetime(row.get("created_at")),
    )


class SupabaseChirpStore(SupabaseAdapter, ChirpStore):
    """Supabase implementation of ChirpStore."""

    @staticmethod
    def _parse_chirp(row: Dict[str, Any]) -> Chirp:
        return Chirp(
            id=int(row["id"]),
            user_id=int(row["user_id"]),
            message=row.get("message", ""),
            created_at=parse_datetime(row.get("created_at")),
            updated_at=parse_datetime(row.get("updated_at")),
        )

    def insert(self, user_id: int, message: str) -> Chirp:
        now = utcnow().isoformat()
        result = self._execute(
            self._client.table("chirps").insert({
                "user_id": user_id,
                "message": message,
                "created_at": now,
                "updated_at": now,
            }),
            "insert chirp",
        )
        if not result.data:
            raise StoreError("Supabase returned no row for inserted chirp")
        return self._parse_chirp(result.data[0])

    def find_by_id(self, chirp_id: int) -> Optional[Chirp]:
        result = self._execute(
            self._client.table("chirps").select("*").eq("id", chirp_id),
            "select chirp",
        )
        if result.data:
            return self._parse_chirp(result.data[0])
        return None

    def list_all(self) -> List[Chirp]:
        result = self._execute(
            self._client.table("chirps").select("*")
            .order("created_at", desc=True)
            .order("id", desc=True),
            "list chirps",
        )
        return [self._parse_chirp(row) for row in (result.data or [])]

    def list_users_except(self, user_id: int) -> List[User]:
        result = self._execute(
            self._client.table("users").select("*").neq("id", user_id).order("id"),
            "list users",
        )
        return [_parse_user(row) for row in (result.data or [])]

    def count(self) -> int:
        result = self._execute(
            self._client.table("chirps").select("id", count="exact"),
            "count chirps",
        )
        return result.count or 0

    def update(self, chirp_id: int, message: str) -> Chirp:
        result = self._execute(
            self._client.table("chirps").update({
                "message": message,
                "updated_at": utcnow().isoformat(),
            }).eq("id", chirp_id),
            "update chirp",
        )
        if not result.data:
            raise NotFoundError("Chirp", chirp_id)
        return self._parse_chirp(result.data[0])

    def delete(self, chirp_id: int) -> None:
        result = self._execute(
            self._client.table("chirps").delete().eq("id", chirp_id),
            "delete chirp",
        )
        if not result.data:
            raise NotFoundError("Chirp", chirp_id)


class SupabaseUserStore(SupabaseAdapter, UserStore):
    """Supabase implementation of UserStore."""

    def create(self, name: str, email: str, password_hash: str) -> User:
        email = email.lower()
        if self.find_by_email(email):
            raise ValidationError("email", "The email has already been taken.")
        result = self._execute(
            self._client.table("users").insert({
                "name": name,
                "email": email,
                "password_hash": password_hash,
                "created_at": utcnow().isoformat(),
            }),
            "insert user",
        )
        if not result.data:
            raise StoreError("Supabase returned no row for inserted user")
        return _parse_user(result.data[0])

    def get(self, user_id: int) -> Optional[User]:
        result = self._execute(
            self._client.table("users").select("*").eq("id", user_id),
            "select user",
        )
        return _parse_user(result.data[0]) if result.data else None

    def find_by_email(self, email: str) -> Optional[User]:
        result = self._execute(
            # Stored lower-cased; exact match keeps "_" and "%" literal
            self._client.table("users").select("*").eq("email", email.lower()),
            "select user by email",
        )
        return _parse_user(result.data[0]) if result.data else None

    def list_all(self) -> List[User]:
        result = self._execute(
            self._client.table("users").select("*").order("id"),
            "list users",
        )
        return [_parse_user(row) for row in (result.data or [])]

    def get_many(self, user_ids) -> List[User]:
        ids = sorted(set(user_ids))
        if not ids:
            return []
        result = self._execute(
            self._client.table("users").select("*").in_("id", ids),
            "select users",
        )
        return [_parse_user(row) for row in (result.data or [])]


class SupabaseNotificationsRepository(SupabaseAdapter, NotificationsRepository):
    """Supabase implementation of NotificationsRepository."""

    @staticmethod
    def _parse_record(row: Dict[str, Any]) -> NotificationRecord:
        data_field = row.get("data") or {}
        if isinstance(data_field, str):
            try:
                data_field = json.loads(data_field)
            except json.JSONDecodeError:
                data_field = {}
        return NotificationRecord(
            id=str(row["id"]),
            user_id=int(row["user_id"]),
            notification_type=row.get("type") or "new_chirp",
            data=data_field,
            created_at=parse_datetime(row.get("created_at")),
            read_at=parse_datetime(row.get("read_at")),
        )

    def insert(self, record: NotificationRecord) -> str:
        result = self._execute(
            self._client.table("notifications").insert({
                "id": record.id,
                "user_id": record.user_id,
                "type": record.notification_type,
                "data": record.data,
                "created_at": (record.created_at or utcnow()).isoformat(),
                "read_at": record.read_at.isoformat() if record.read_at else None,
            }),
            "insert notification",
        )
        if not result.data:
            raise StoreError(f"Failed to insert notification {record.id}")
        return record.id

    def list_for_user(
        self,
        user_id: int,
        unread_only: bool = False,
        limit: int = 20,
    ) -> List[NotificationRecord]:
        query = self._client.table("notifications").select("*").eq("user_id", user_id)
        if unread_only:
            query = query.is_("read_at", "null")
        result = self._execute(
            query.order("created_at", desc=True).limit(limit),
            "list notifications",
        )
        return [self._parse_record(row) for row in (result.data or [])]

    def unread_count(self, user_id: int) -> int:
        result = self._execute(
            self._client.table("notifications").select("id", count="exact")
            .eq("user_id", user_id)
            .is_("read_at", "null"),
            "count notifications",
        )
        return result.count or 0

    def mark_read(self, user_id: int, notification_id: str) -> bool:
        self._execute(
            self._client.table("notifications").update({
                "read_at": utcnow().isoformat(),
            }).eq("id", notification_id).eq("user_id", user_id).is_("read_at", "null"),
            "mark notification read",
        )
        # An already-read notification keeps its first read_at
        result = self._execute(
            self._client.table("notifications").select("id")
            .eq("id", notification_id).eq("user_id", user_id),
            "select notification",
        )
        return bool(result.data)

    def mark_all_read(self, user_id: int) -> int:
        result = self._execute(
            self._client.table("notifications").update({
                "read_at": utcnow().isoformat(),
            }).eq("user_id", user_id).is_("read_at", "null"),
            "mark notifications read",
        )
        return len(result.data) if result.data else 0

# src/chirper/adapters/database/sqlite.py
"""
SQLite Database Adapters

Implement the store ports using a local SQLite file.
This is the default backend for local development and tests.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from ...core.errors import NotFoundError, StoreError, ValidationError
from ...core.models import Chirp, NotificationRecord, User, parse_datetime, utcnow
from ...core.ports import ChirpStore, NotificationsRepository, UserStore
from ...db import connect, init_db

logger = logging.getLogger(__name__)


class SQLiteAdapter:
    """
    Shared connection handling for the SQLite adapters.

    Each operation opens its own connection, commits on success and always
    closes. ``sqlite3.Error`` never escapes: it is logged and re-raised as
    ``StoreError``.
    """

    def __init__(self, db_path: str = "chirper.db", initialize: bool = True):
        """
        Initialize SQLite adapter.

        Args:
            db_path: Path to the SQLite database file
            initialize: Create tables if they do not exist
        """
        self._db_path = db_path
        if initialize:
            try:
                init_db(db_path)
            except sqlite3.Error as e:
                logger.error(f"Failed to initialize SQLite schema at {db_path}: {e}")
                raise StoreError(f"Could not initialize database at {db_path}", e) from e
        logger.info(f"{type(self).__name__} initialized with {db_path}")

    @contextmanager
    def _get_connection(self):
        """Get a database connection with row_factory set."""
        try:
            conn = connect(self._db_path)
        except sqlite3.Error as e:
            logger.error(f"Cannot open {self._db_path}: {e}")
            raise StoreError("Database unavailable", e) from e
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"SQLite error on {self._db_path}: {e}")
            raise StoreError("Database operation failed", e) from e
        finally:
            conn.close()


class SQLiteChirpStore(SQLiteAdapter, ChirpStore):
    """SQLite implementation of ChirpStore."""

    @staticmethod
    def _row_to_chirp(row: sqlite3.Row) -> Chirp:
        return Chirp(
            id=row["id"],
            user_id=row["user_id"],
            message=row["message"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    def insert(self, user_id: int, message: str) -> Chirp:
        now = utcnow().isoformat()
        try:
            with self._get_connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO chirps (user_id, message, created_at, updated_at) VALUES (?, ?, ?, ?)",
                    (user_id, message, now, now),
                )
                row = conn.execute("SELECT * FROM chirps WHERE id = ?", (cursor.lastrowid,)).fetchone()
        except sqlite3.IntegrityError as e:
            # Only the user foreign key can fail here
            raise NotFoundError("User", user_id) from e
        return self._row_to_chirp(row)

    def find_by_id(self, chirp_id: int) -> Optional[Chirp]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM chirps WHERE id = ?", (chirp_id,)).fetchone()
        return self._row_to_chirp(row) if row else None

    def list_all(self) -> List[Chirp]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM chirps ORDER BY created_at DESC, id DESC"
            ).fetchall()
        return [self._row_to_chirp(row) for row in rows]

    def list_users_except(self, user_id: int) -> List[User]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM users WHERE id != ? ORDER BY id", (user_id,)
            ).fetchall()
        return [SQLiteUserStore._row_to_user(row) for row in rows]

    def count(self) -> int:
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM chirps").fetchone()[0]

    def update(self, chirp_id: int, message: str) -> Chirp:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE chirps SET message = ?, updated_at = ? WHERE id = ?",
                (message, utcnow().isoformat(), chirp_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Chirp", chirp_id)
            row = conn.execute("SELECT * FROM chirps WHERE id = ?", (chirp_id,)).fetchone()
        return self._row_to_chirp(row)

    def delete(self, chirp_id: int) -> None:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM chirps WHERE id = ?", (chirp_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("Chirp", chirp_id)


class SQLiteUserStore(SQLiteAdapter, UserStore):
    """SQLite implementation of UserStore."""

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=parse_datetime(row["created_at"]),
        )

    def create(self, name: str, email: str, password_hash: str) -> User:
        try:
            with self._get_connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO users (name, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                    (name, email, password_hash, utcnow().isoformat()),
                )
                row = conn.execute("SELECT * FROM users WHERE id = ?", (cursor.lastrowid,)).fetchone()
        except sqlite3.IntegrityError as e:
            raise ValidationError("email", "The email has already been taken.") from e
        return self._row_to_user(row)

    def get(self, user_id: int) -> Optional[User]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._row_to_user(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE LOWER(email) = LOWER(?)", (email,)
            ).fetchone()
        return self._row_to_user(row) if row else None

    def list_all(self) -> List[User]:
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
        return [self._row_to_user(row) for row in rows]

    def get_many(self, user_ids) -> List[User]:
        ids = sorted(set(user_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM users WHERE id IN ({placeholders})", ids
            ).fetchall()
        return [self._row_to_user(row) for row in rows]


class SQLiteNotificationsRepository(SQLiteAdapter, NotificationsRepository):
    """SQLite implementation of NotificationsRepository."""

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> NotificationRecord:
        try:
            data: Dict[str, Any] = json.loads(row["data"] or "{}")
        except json.JSONDecodeError:
            data = {}
        return NotificationRecord(
            id=row["id"],
            user_id=row["user_id"],
            notification_type=row["type"],
            data=data,
            created_at=parse_datetime(row["created_at"]),
            read_at=parse_datetime(row["read_at"]),
        )

    def insert(self, record: NotificationRecord) -> str:
        created_at = record.created_at or utcnow()
        try:
            with self._get_connection() as conn:
                conn.execute(
                    "INSERT INTO notifications (id, user_id, type, data, created_at, read_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        record.id,
                        record.user_id,
                        record.notification_type,
                        json.dumps(record.data),
                        created_at.isoformat(),
                        record.read_at.isoformat() if record.read_at else None,
                    ),
                )
        except sqlite3.IntegrityError as e:
            raise StoreError(f"Could not store notification {record.id}", e) from e
        return record.id

    def list_for_user(
        self,
        user_id: int,
        unread_only: bool = False,
        limit: int = 20,
    ) -> List[NotificationRecord]:
        query = "SELECT * FROM notifications WHERE user_id = ?"
        if unread_only:
            query += " AND read_at IS NULL"
        query += " ORDER BY created_at DESC LIMIT ?"
        with self._get_connection() as conn:
            rows = conn.execute(query, (user_id, limit)).fetchall()
        return [self._row_to_record(row) for row in rows]

    def unread_count(self, user_id: int) -> int:
        with self._get_connection() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM notifications WHERE user_id = ? AND read_at IS NULL",
                (user_id,),
            ).fetchone()[0]

    def mark_read(self, user_id: int, notification_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE notifications SET read_at = COALESCE(read_at, ?) WHERE id = ? AND user_id = ?",
                (utcnow().isoformat(), notification_id, user_id),
            )
            return cursor.rowcount > 0

    def mark_all_read(self, user_id: int) -> int:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE notifications SET read_at = ? WHERE user_id = ? AND read_at IS NULL",
                (utcnow().isoformat(), user_id),
            )
            return cursor.rowcount

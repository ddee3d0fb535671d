"""
Database adapters.

Available adapters:
- SQLite*: local file database (default)
- Supabase*: hosted Postgres via the Supabase client
"""

from .sqlite import SQLiteChirpStore, SQLiteUserStore, SQLiteNotificationsRepository
from .supabase import SupabaseChirpStore, SupabaseUserStore, SupabaseNotificationsRepository

__all__ = [
    "SQLiteChirpStore",
    "SQLiteUserStore",
    "SQLiteNotificationsRepository",
    "SupabaseChirpStore",
    "SupabaseUserStore",
    "SupabaseNotificationsRepository",
]

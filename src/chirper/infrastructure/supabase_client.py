# src/chirper/infrastructure/supabase_client.py
"""
Supabase Client

Provides the Supabase client used by the hosted storage backend.

Usage:
    from .supabase_client import get_supabase_client

    client = get_supabase_client(url, key)
    result = client.table("chirps").select("*").execute()
"""

import logging
import os
from typing import Optional

from supabase import Client, create_client

from ..core.errors import StoreError

logger = logging.getLogger(__name__)

# Singleton client
_supabase_client: Optional[Client] = None


def get_supabase_client(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """
    Get the Supabase client singleton.

    Args:
        url: Project URL (falls back to SUPABASE_URL)
        key: API key (falls back to SUPABASE_KEY / SUPABASE_ANON_KEY)

    Raises:
        StoreError: if Supabase is not configured or the client cannot be created
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    supabase_url = url or os.environ.get("SUPABASE_URL")
    supabase_key = key or os.environ.get("SUPABASE_KEY") or os.environ.get("SUPABASE_ANON_KEY")

    if not supabase_url or not supabase_key:
        raise StoreError("Supabase not configured (missing SUPABASE_URL or SUPABASE_KEY)")

    try:
        _supabase_client = create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Failed to connect to Supabase: {e}")
        raise StoreError("Could not create Supabase client", e) from e

    logger.info(f"Connected to Supabase: {supabase_url}")
    return _supabase_client

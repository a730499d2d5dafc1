# src/minutes_analytics/infrastructure/supabase_client.py
"""
Supabase Client

Provides the shared Supabase client used by the analytics store adapter.

Usage:
    from .supabase_client import get_supabase_client

    client = get_supabase_client()
    result = client.table("tasks").select("id, status").execute()
"""

import logging
import os
from typing import Optional

from supabase import Client, create_client

logger = logging.getLogger(__name__)

# Singleton client
_supabase_client: Optional[Client] = None


def get_supabase_client(url: Optional[str] = None, key: Optional[str] = None) -> Optional[Client]:
    """
    Get the Supabase client singleton.

    Credentials come from the arguments, falling back to SUPABASE_URL and
    SUPABASE_KEY (or SUPABASE_ANON_KEY).

    Returns:
        Supabase client or None if not configured
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    supabase_url = url or os.environ.get("SUPABASE_URL")
    supabase_key = key or os.environ.get("SUPABASE_KEY") or os.environ.get("SUPABASE_ANON_KEY")

    if not supabase_url or not supabase_key:
        logger.warning("Supabase not configured (missing SUPABASE_URL or SUPABASE_KEY)")
        return None

    _supabase_client = create_client(supabase_url, supabase_key)
    logger.info(f"Connected to Supabase: {supabase_url}")
    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the cached client (tests, credential rotation)."""
    global _supabase_client
    _supabase_client = None

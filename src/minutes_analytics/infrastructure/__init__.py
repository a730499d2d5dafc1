# src/minutes_analytics/infrastructure/__init__.py
"""
Infrastructure - connections to external services.
"""

from .supabase_client import get_supabase_client, reset_supabase_client

__all__ = ["get_supabase_client", "reset_supabase_client"]

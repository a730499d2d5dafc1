# src/minutes_analytics/adapters/database/__init__.py
"""
Database adapters package.

Contains concrete implementations of AnalyticsStore for different backends.
"""

from .supabase import SupabaseAnalyticsStore, render_select
from .memory import InMemoryAnalyticsStore

__all__ = [
    "SupabaseAnalyticsStore",
    "InMemoryAnalyticsStore",
    "render_select",
]

# src/minutes_analytics/core/ports/__init__.py
"""
Port Interfaces for Dependency Inversion

The analytics engines only see these abstractions; adapters under
``minutes_analytics.adapters`` provide the behavior.
"""

from .store import AnalyticsStore, QueryBuilder, Relation, Row, RpcHandler

__all__ = [
    "AnalyticsStore",
    "QueryBuilder",
    "Relation",
    "Row",
    "RpcHandler",
]

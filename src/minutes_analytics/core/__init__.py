# src/minutes_analytics/core/__init__.py
"""
Core domain layer - interfaces and abstractions.

Following Ports and Adapters (Hexagonal Architecture):
- Ports are the interfaces that define how the domain reaches the store
- Adapters are the concrete implementations of those ports
"""

from .ports import AnalyticsStore, QueryBuilder, Relation
from .models import MeetingStatus, TaskPriority, TaskStatus, Tables

__all__ = [
    # Ports
    "AnalyticsStore",
    "QueryBuilder",
    "Relation",
    # Models
    "MeetingStatus",
    "TaskPriority",
    "TaskStatus",
    "Tables",
]

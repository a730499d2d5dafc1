# src/minutes_analytics/core/models/__init__.py
"""
Domain vocabulary shared by adapters and engines.

Rows travel as plain dicts straight from the store; these enums only name
the values the analytics layer interprets.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task workflow statuses."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priorities, highest first."""
    URGENT = "urgent"
    IMPORTANT = "important"
    MEDIUM = "medium"
    LOW = "low"


class MeetingStatus(str, Enum):
    """Transcript processing status of a meeting."""
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Tables:
    """Store table names."""
    TASKS = "tasks"
    PROFILES = "profiles"
    TEAMS = "teams"
    DEPARTMENTS = "departments"
    CITIES = "cities"
    GOALS = "goals"
    MEETINGS = "meetings"


__all__ = ["TaskStatus", "TaskPriority", "MeetingStatus", "Tables"]

# src/minutes_analytics/domains/analytics/services/utils.py
"""
Shared analytics helpers.

Pure functions over task rows (plain dicts from the store). Every
aggregation engine folds its rows through these, so the overdue, weighting
and closure-time rules live in exactly one place.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ....config import get_config
from ....core.models import TaskStatus
from ....shared.utils import Timestamp, parse_timestamp
from ..constants import (
    DEFAULT_BREAKDOWN_PRIORITY,
    EXTRACTION_PRIORITY_MAP,
    PRIORITY_WEIGHTS,
    UNKNOWN_DEPARTMENT_KEY,
)

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
SECONDS_PER_HOUR = 3600


def hours_between(start: Timestamp, end: Timestamp) -> float:
    """Elapsed hours from ``start`` to ``end``; negative if they are inverted."""
    return (parse_timestamp(end) - parse_timestamp(start)).total_seconds() / SECONDS_PER_HOUR


def is_overdue(task: Dict[str, Any], now: datetime) -> bool:
    """
    A task is overdue when it has a due date in the past and is not completed.

    Completed tasks are never overdue, whatever their due date.
    """
    if not task.get("due_date") or task.get("status") == TaskStatus.COMPLETED:
        return False
    return parse_timestamp(task["due_date"]) < now


def priority_weight(priority: Optional[str]) -> int:
    """urgent=4, important=3, medium=2, low=1, anything else 0."""
    return PRIORITY_WEIGHTS.get(priority, 0) if priority else 0


def breakdown_priority(priority: Optional[str]) -> str:
    """Histogram bucket for ``priority``; missing or unknown folds into medium."""
    return priority if priority in PRIORITY_WEIGHTS else DEFAULT_BREAKDOWN_PRIORITY


def weighted_average(entries: Iterable[Dict[str, Any]]) -> float:
    """
    Priority-weighted mean of ``entry["time"]``.

    Entries whose priority weighs 0 contribute neither time nor weight.
    Returns 0 when nothing carries weight.
    """
    total_weighted_time = 0.0
    total_weight = 0
    for entry in entries:
        weight = priority_weight(entry.get("priority"))
        if weight > 0:
            total_weighted_time += entry["time"] * weight
            total_weight += weight
    return total_weighted_time / total_weight if total_weight else 0.0


def median(values: Sequence[float]) -> float:
    """Median of ``values`` (input is left untouched); 0 for an empty sequence."""
    if not values:
        return 0.0
    ordered = sorted(values)
    half = len(ordered) // 2
    if len(ordered) % 2:
        return float(ordered[half])
    return (ordered[half - 1] + ordered[half]) / 2.0


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def mean_or_none(values: Sequence[float]) -> Optional[float]:
    """Mean, or None when there is no data (distinct from a zero mean)."""
    return sum(values) / len(values) if values else None


def percent(part: int, total: int) -> float:
    return part / total * 100 if total else 0.0


def group_tasks_by_department(tasks: Iterable[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Group tasks on ``department_id``; tasks without one land under "unknown"."""
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for task in tasks:
        groups.setdefault(task.get("department_id") or UNKNOWN_DEPARTMENT_KEY, []).append(task)
    return groups


def closure_hours(task: Dict[str, Any], policy: Optional[str] = None) -> Optional[float]:
    """
    Hours from creation to completion, or None when the task has not closed.

    Defined only for completed tasks with an ``updated_at``. When
    ``updated_at`` precedes ``created_at`` the configured
    ``negative_closure_policy`` applies:

    - keep: return the negative value
    - clamp: return 0
    - exclude: return None (the task contributes no closure time)

    Every inverted record is logged as a warning whatever the policy.
    """
    if task.get("status") != TaskStatus.COMPLETED or not task.get("updated_at"):
        return None

    hours = hours_between(task["created_at"], task["updated_at"])
    if hours >= 0:
        return hours

    policy = policy or get_config().analytics.negative_closure_policy
    logger.warning(
        f"Task {task.get('id')} closed before it was created "
        f"({hours:.2f}h); applying negative closure policy '{policy}'"
    )
    if policy == "clamp":
        return 0.0
    if policy == "exclude":
        return None
    return hours


def is_critical_issue(task: Dict[str, Any], now: datetime, stale_days: Optional[int] = None) -> bool:
    """
    Composite risk signal: overdue, urgent, or in progress for too long.

    The signals are OR-ed, so a task counts once however many it trips.
    "Too long" is measured from ``created_at`` since status transitions are
    not recorded.
    """
    if is_overdue(task, now) or task.get("priority") == "urgent":
        return True
    if task.get("status") == TaskStatus.IN_PROGRESS and task.get("created_at"):
        if stale_days is None:
            stale_days = get_config().analytics.stale_in_progress_days
        return hours_between(task["created_at"], now) / HOURS_PER_DAY > stale_days
    return False


def map_priority_to_db(priority: Any) -> str:
    """Map an extraction payload priority ("1".."5") to the stored priority."""
    return EXTRACTION_PRIORITY_MAP.get(str(priority).strip(), DEFAULT_BREAKDOWN_PRIORITY)

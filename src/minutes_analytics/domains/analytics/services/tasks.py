# src/minutes_analytics/domains/analytics/services/tasks.py
"""
Task Progress & Closure-Time Engine

Services:
- get_task_progress_by_scope: status distribution, period activity,
  priority breakdown and overdue sampling for tasks created in the window
- get_task_completion_time: mean closure hours, overall and per priority,
  for tasks closed in the window
- get_weighted_task_closure_time: priority-weighted mean closure hours

Progress filters the window on ``created_at``; the two closure-time reports
filter it on ``updated_at`` because they measure closures in the period.
Department attribution is DIRECT (``task.department_id``) throughout.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ....config import get_config
from ....core.container import get_analytics_store
from ....core.models import Tables
from ....core.ports.store import AnalyticsStore
from ....shared.utils import parse_timestamp, utc_now
from ..constants import PRIORITIES
from ..models import (
    OverdueTaskSample,
    PriorityAverages,
    TaskClosureTimeStats,
    TaskProgressStats,
    WeightedClosureStats,
)
from .scope import DateRange, ScopeFilter, resolve_date_range
from .utils import breakdown_priority, closure_hours, is_overdue, mean, mean_or_none, percent, weighted_average

logger = logging.getLogger(__name__)

PROGRESS_FIELDS = ("id", "title", "status", "priority", "due_date", "created_at", "updated_at", "department_id")
CLOSURE_FIELDS = ("id", "status", "priority", "created_at", "updated_at", "department_id")


def _fetch_tasks(
    store: AnalyticsStore,
    scope: ScopeFilter,
    date_range: DateRange,
    fields,
    date_field: str,
    completed_only: bool = False,
) -> List[Dict[str, Any]]:
    relations = [scope.assignee_relation()] if scope.requires_team_join() else []
    query = store.table(Tables.TASKS).select_with_relations(fields, relations)

    if completed_only:
        query = query.filter_equals("status", "completed").filter_not_null("updated_at")

    query = scope.apply_to_task_query(query)
    query = date_range.apply(query, date_field)
    return query.execute()


def _closure_samples(tasks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """(time, raw priority) pairs for every task with a defined closure time."""
    samples = []
    for task in tasks:
        hours = closure_hours(task)
        if hours is not None:
            samples.append({"time": hours, "priority": task.get("priority")})
    return samples


def priority_averages(samples: List[Dict[str, Any]]) -> PriorityAverages:
    """Mean hours per priority bucket; tasks without a priority count as medium."""
    buckets: Dict[str, List[float]] = {p: [] for p in PRIORITIES}
    for sample in samples:
        buckets[breakdown_priority(sample["priority"])].append(sample["time"])
    return PriorityAverages(**{p: mean_or_none(times) for p, times in buckets.items()})


def get_task_progress_by_scope(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> TaskProgressStats:
    """
    Progress snapshot for tasks in scope created within the window.

    Returns:
        TaskProgressStats with status distribution (percentages 0 when
        there are no tasks), created/completed-in-period counts, priority
        breakdown and the most overdue tasks (earliest due date first).
    """
    scope = scope or ScopeFilter()
    date_range = resolve_date_range(date_range)
    store = store or get_analytics_store()
    now = now or utc_now()

    tasks = _fetch_tasks(store, scope, date_range, PROGRESS_FIELDS, "created_at")

    stats = TaskProgressStats()
    distribution = stats.distribution
    overdue_tasks = []

    distribution.total = len(tasks)
    # the fetch is already limited to tasks created in the window
    stats.period_activity.created_count = len(tasks)

    for task in tasks:
        status = task.get("status")
        if status == "completed":
            distribution.completed += 1
        elif status == "in_progress":
            distribution.in_progress += 1
        else:
            distribution.todo += 1

        if status == "completed" and (not date_range.is_bounded or date_range.contains(task.get("updated_at"))):
            stats.period_activity.completed_count += 1

        bucket = breakdown_priority(task.get("priority"))
        setattr(stats.priority_breakdown, bucket, getattr(stats.priority_breakdown, bucket) + 1)

        if is_overdue(task, now):
            overdue_tasks.append(task)

    distribution.completed_percent = percent(distribution.completed, distribution.total)
    distribution.in_progress_percent = percent(distribution.in_progress, distribution.total)
    distribution.todo_percent = percent(distribution.todo, distribution.total)

    # sorted() is stable: equal due dates keep store order
    overdue_tasks = sorted(overdue_tasks, key=lambda t: parse_timestamp(t["due_date"]))
    sample_size = get_config().analytics.overdue_sample_size
    stats.overdue.count = len(overdue_tasks)
    stats.overdue.most_overdue_sample = [
        OverdueTaskSample(id=t["id"], title=t.get("title"), due_date=t["due_date"])
        for t in overdue_tasks[:sample_size]
    ]

    logger.debug(f"Task progress [{scope.describe()}]: {distribution.total} tasks, {stats.overdue.count} overdue")
    return stats


def get_task_completion_time(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> TaskClosureTimeStats:
    """
    Mean closure hours for tasks in scope completed within the window.

    The per-priority means are None for priorities with no closed tasks.
    """
    scope = scope or ScopeFilter()
    store = store or get_analytics_store()

    tasks = _fetch_tasks(
        store, scope, resolve_date_range(date_range), CLOSURE_FIELDS, "updated_at", completed_only=True
    )
    samples = _closure_samples(tasks)

    logger.debug(f"Completion time [{scope.describe()}]: {len(samples)} closed tasks")
    return TaskClosureTimeStats(
        overall_average_hours=mean([s["time"] for s in samples]),
        by_priority=priority_averages(samples),
    )


def get_weighted_task_closure_time(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> WeightedClosureStats:
    """
    Priority-weighted mean closure hours for tasks closed within the window.

    Tasks without a priority weigh 0 and so do not move the weighted mean,
    although they still appear in the medium per-priority bucket.
    """
    scope = scope or ScopeFilter()
    store = store or get_analytics_store()

    tasks = _fetch_tasks(
        store, scope, resolve_date_range(date_range), CLOSURE_FIELDS, "updated_at", completed_only=True
    )
    samples = _closure_samples(tasks)

    return WeightedClosureStats(
        weighted_average_hours=weighted_average(samples),
        by_priority=priority_averages(samples),
    )

# src/minutes_analytics/domains/analytics/services/departments.py
"""
Department Aggregation Engine

Groups tasks on their own ``department_id``. The assignee/team join is only
added when the scope names a city or a team.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ....core.container import get_analytics_store
from ....core.models import Tables
from ....core.ports.store import AnalyticsStore, Relation
from ....shared.utils import safe_get, utc_now
from ..constants import UNKNOWN_DEPARTMENT_NAME
from ..models import DepartmentClosureMetric
from .scope import DateRange, ScopeFilter, resolve_date_range
from .utils import closure_hours, group_tasks_by_department, is_overdue, mean, median

logger = logging.getLogger(__name__)

TASK_FIELDS = ("id", "status", "priority", "due_date", "created_at", "updated_at", "department_id")

DEPARTMENT_RELATION = Relation("department", Tables.DEPARTMENTS, "department_id", ("id", "name"))


def get_department_closure_times(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> List[DepartmentClosureMetric]:
    """
    Per-department completed count, mean and median close hours, overdue count.

    Tasks without a department are left out. Departments are listed in the
    order their first task comes back from the store.
    """
    scope = scope or ScopeFilter()
    store = store or get_analytics_store()
    now = now or utc_now()

    relations = [DEPARTMENT_RELATION]
    if scope.requires_team_join():
        relations.append(scope.assignee_relation())

    query = (
        store.table(Tables.TASKS)
        .select_with_relations(TASK_FIELDS, relations)
        .filter_not_null("department_id")
    )
    query = scope.apply_to_task_query(query)
    query = resolve_date_range(date_range).apply(query, "created_at")
    tasks = query.execute()

    metrics = []
    for department_id, department_tasks in group_tasks_by_department(tasks).items():
        times = [t for t in (closure_hours(task) for task in department_tasks) if t is not None]
        name = safe_get(department_tasks[0], "department", "name", default=UNKNOWN_DEPARTMENT_NAME)
        metrics.append(DepartmentClosureMetric(
            department_id=department_id,
            department_name=name,
            completed_tasks=sum(1 for t in department_tasks if t.get("status") == "completed"),
            average_close_hours=mean(times),
            median_close_hours=median(times),
            overdue_tasks=sum(1 for t in department_tasks if is_overdue(t, now)),
        ))

    logger.debug(f"Department closure times [{scope.describe()}]: {len(metrics)} departments")
    return metrics

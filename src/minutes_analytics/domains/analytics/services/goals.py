# src/minutes_analytics/domains/analytics/services/goals.py
"""
Goal Summary Engine

Goals carry a department but no city or team, so a city/team scope is
resolved in two steps: collect the distinct goal ids of tasks in scope, then
fetch those goals. Progress always counts every task of a selected goal
created in the window.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ....core.container import get_analytics_store
from ....core.models import Tables
from ....core.ports.store import AnalyticsStore, Relation
from ....shared.utils import utc_now
from ..models import GoalDetail, GoalSummary
from .scope import DateRange, ScopeFilter, resolve_date_range
from .utils import is_overdue, percent

logger = logging.getLogger(__name__)

GOAL_FIELDS = ("id", "title", "description", "year", "quarter", "status", "department_id")

GOAL_TASKS_RELATION = Relation(
    "tasks",
    Tables.TASKS,
    "goal_id",
    ("id", "status", "priority", "due_date", "created_at", "updated_at"),
    many=True,
)


def _goal_ids_in_scope(scope: ScopeFilter, store: AnalyticsStore) -> List[str]:
    """Distinct goal ids of tasks whose assignee's team matches the city/team scope."""
    team_only = ScopeFilter(city_id=scope.city_id, team_id=scope.team_id)
    query = (
        store.table(Tables.TASKS)
        .select_with_relations(("goal_id",), [team_only.assignee_relation(inner=True)])
        .filter_not_null("goal_id")
    )
    tasks = team_only.apply_to_task_query(query).execute()

    goal_ids: List[str] = []
    for task in tasks:
        if task["goal_id"] not in goal_ids:
            goal_ids.append(task["goal_id"])
    return goal_ids


def get_goal_summary(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> List[GoalSummary]:
    """
    Per-goal task totals, completion, at-risk count and progress percent.

    A task is at risk when it is not completed and is either overdue or
    urgent. Returns an empty list when a city/team scope reaches no goal.
    """
    scope = scope or ScopeFilter()
    date_range = resolve_date_range(date_range)
    store = store or get_analytics_store()
    now = now or utc_now()

    query = store.table(Tables.GOALS).select_with_relations(GOAL_FIELDS, [GOAL_TASKS_RELATION])

    if scope.department_id:
        query = query.filter_equals("department_id", scope.department_id)

    if scope.city_id or scope.team_id:
        goal_ids = _goal_ids_in_scope(scope, store)
        if not goal_ids:
            logger.debug(f"Goal summary [{scope.describe()}]: no goals in scope")
            return []
        query = query.filter_in("id", goal_ids)

    summaries = []
    for goal in query.execute():
        tasks = goal.get("tasks") or []
        if date_range.is_bounded:
            tasks = [t for t in tasks if date_range.contains(t.get("created_at"))]

        completed = sum(1 for t in tasks if t.get("status") == "completed")
        at_risk = sum(
            1 for t in tasks
            if t.get("status") != "completed" and (is_overdue(t, now) or t.get("priority") == "urgent")
        )
        summaries.append(GoalSummary(
            goal=GoalDetail(**{field: goal.get(field) for field in GOAL_FIELDS}),
            total_tasks=len(tasks),
            completed_tasks=completed,
            at_risk_tasks=at_risk,
            progress_percent=percent(completed, len(tasks)),
        ))

    logger.debug(f"Goal summary [{scope.describe()}]: {len(summaries)} goals")
    return summaries

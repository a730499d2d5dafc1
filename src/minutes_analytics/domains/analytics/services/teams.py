# src/minutes_analytics/domains/analytics/services/teams.py
"""
Team Aggregation Engine

Tasks reach a team only through their assignee, so both reports inner-join
``assignee -> team`` and drop tasks that resolve to no team. The department
filter here means the department of the assignee's team.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ....core.container import get_analytics_store
from ....core.models import Tables
from ....core.ports.store import AnalyticsStore
from ....shared.utils import safe_get, utc_now
from ..models import TeamClosureMetric, TeamSupportMetric
from .scope import DateRange, DepartmentAttribution, ScopeFilter, resolve_date_range
from .utils import closure_hours, is_critical_issue, is_overdue, mean

logger = logging.getLogger(__name__)

TASK_FIELDS = ("id", "status", "priority", "due_date", "created_at", "updated_at")
TEAM_FIELDS = ("id", "name", "city_id", "department_id")


def _fetch_team_tasks(
    store: AnalyticsStore,
    scope: ScopeFilter,
    date_range: DateRange,
) -> List[Dict[str, Any]]:
    relation = scope.assignee_relation(TEAM_FIELDS, inner=True, attribution=DepartmentAttribution.TEAM)
    query = store.table(Tables.TASKS).select_with_relations(TASK_FIELDS, [relation])
    query = scope.apply_to_task_query(query, DepartmentAttribution.TEAM)
    query = date_range.apply(query, "created_at")
    return query.execute()


def _group_by_team(tasks: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """team id -> {"team": team row, "tasks": [...]}, in first-seen order."""
    groups: Dict[str, Dict[str, Any]] = {}
    for task in tasks:
        team = safe_get(task, "assignee", "team")
        if not team:
            continue
        group = groups.setdefault(team["id"], {"team": team, "tasks": []})
        group["tasks"].append(task)
    return groups


def _closure_times(tasks: List[Dict[str, Any]]) -> List[float]:
    times = [closure_hours(task) for task in tasks]
    return [t for t in times if t is not None]


def get_team_closure_times(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> List[TeamClosureMetric]:
    """
    Per-team completed count, mean close hours and overdue count.

    Only teams with at least one task in the window appear. A completed
    task without ``updated_at`` still counts as completed but adds no
    closure time.
    """
    scope = scope or ScopeFilter()
    store = store or get_analytics_store()
    now = now or utc_now()

    tasks = _fetch_team_tasks(store, scope, resolve_date_range(date_range))

    metrics = []
    for team_id, group in _group_by_team(tasks).items():
        team, team_tasks = group["team"], group["tasks"]
        metrics.append(TeamClosureMetric(
            team_id=team_id,
            team_name=team.get("name"),
            city_id=team.get("city_id"),
            department_id=team.get("department_id"),
            completed_tasks=sum(1 for t in team_tasks if t.get("status") == "completed"),
            average_close_hours=mean(_closure_times(team_tasks)),
            overdue_tasks=sum(1 for t in team_tasks if is_overdue(t, now)),
        ))

    logger.debug(f"Team closure times [{scope.describe()}]: {len(metrics)} teams from {len(tasks)} tasks")
    return metrics


def get_teams_needing_support(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> List[TeamSupportMetric]:
    """
    Rank teams by critical issues, most first.

    A task is a critical issue when it is overdue, urgent, or has sat in
    progress past the stale threshold. Teams with equal counts keep their
    first-seen order.
    """
    scope = scope or ScopeFilter()
    store = store or get_analytics_store()
    now = now or utc_now()

    tasks = _fetch_team_tasks(store, scope, resolve_date_range(date_range))

    metrics = []
    for team_id, group in _group_by_team(tasks).items():
        team, team_tasks = group["team"], group["tasks"]
        metrics.append(TeamSupportMetric(
            team_id=team_id,
            team_name=team.get("name"),
            city_id=team.get("city_id"),
            department_id=team.get("department_id"),
            critical_issues=sum(1 for t in team_tasks if is_critical_issue(t, now)),
            average_close_hours=mean(_closure_times(team_tasks)),
            overdue_tasks=sum(1 for t in team_tasks if is_overdue(t, now)),
        ))

    metrics.sort(key=lambda m: m.critical_issues, reverse=True)

    if metrics:
        logger.debug(
            f"Teams needing support [{scope.describe()}]: "
            f"top {metrics[0].team_id} with {metrics[0].critical_issues} critical issues"
        )
    return metrics

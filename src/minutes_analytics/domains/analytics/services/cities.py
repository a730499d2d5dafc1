# src/minutes_analytics/domains/analytics/services/cities.py
"""
City Rollup Engine

A city owns no tasks directly. A task belongs to a city when its assignee is
on one of the city's teams, or when its department has a team in the city.
That OR spans two different join paths, so the store fetches the window and
filter_city_relevant_tasks applies the membership rule in memory.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ....core.container import get_analytics_store
from ....core.models import Tables
from ....core.ports.store import AnalyticsStore, Relation
from ....shared.utils import safe_get, utc_now
from ..constants import PRIORITIES, UNKNOWN_DEPARTMENT_KEY, UNKNOWN_DEPARTMENT_NAME
from ..models import (
    CityGoalProgress,
    CityOverview,
    CitySLAMetrics,
    CityTaskSummary,
    DepartmentInCityMetrics,
    GoalRef,
    PriorityCounts,
)
from .scope import DateRange, resolve_date_range
from .tasks import priority_averages
from .utils import closure_hours, group_tasks_by_department, is_overdue, mean, median, percent

logger = logging.getLogger(__name__)

TASK_FIELDS = (
    "id", "title", "status", "priority", "due_date", "created_at", "updated_at",
    "department_id", "assignee_id",
)

TASK_RELATIONS = (
    Relation("assignee", Tables.PROFILES, "assignee_id", ("team_id",)),
    Relation("department", Tables.DEPARTMENTS, "department_id", ("id", "name")),
)


# =========================================================================
# CITY MEMBERSHIP
# =========================================================================

def get_city_teams(city_id: str, store: AnalyticsStore) -> Tuple[List[str], List[str]]:
    """
    Team ids in the city and the distinct department ids of those teams.

    Department ids keep first-seen order; teams without a department add none.
    """
    teams = (
        store.table(Tables.TEAMS)
        .select_with_relations(("id", "department_id", "name"))
        .filter_equals("city_id", city_id)
        .execute()
    )
    team_ids = [team["id"] for team in teams]
    department_ids: List[str] = []
    for team in teams:
        department_id = team.get("department_id")
        if department_id and department_id not in department_ids:
            department_ids.append(department_id)
    return team_ids, department_ids


def filter_city_relevant_tasks(
    tasks: Iterable[Dict[str, Any]],
    team_ids: Sequence[str],
    department_ids: Sequence[str],
) -> List[Dict[str, Any]]:
    """
    Keep tasks whose assignee's team is in ``team_ids`` OR whose own
    department is in ``department_ids``.

    Expects each task to carry ``department_id`` and an outer-joined
    ``assignee.team_id``.
    """
    teams = set(team_ids)
    departments = set(department_ids)
    relevant = []
    for task in tasks:
        team_id = safe_get(task, "assignee", "team_id")
        department_id = task.get("department_id")
        if (team_id and team_id in teams) or (department_id and department_id in departments):
            relevant.append(task)
    return relevant


# =========================================================================
# OVERVIEW
# =========================================================================

def _department_breakdown(tasks: List[Dict[str, Any]], now: datetime) -> List[DepartmentInCityMetrics]:
    breakdown = []
    for department_id, department_tasks in group_tasks_by_department(tasks).items():
        if department_id == UNKNOWN_DEPARTMENT_KEY:
            continue
        times = [t for t in (closure_hours(task) for task in department_tasks) if t is not None]
        breakdown.append(DepartmentInCityMetrics(
            department_id=department_id,
            department_name=safe_get(department_tasks[0], "department", "name", default=UNKNOWN_DEPARTMENT_NAME),
            total_tasks=len(department_tasks),
            completed_tasks=sum(1 for t in department_tasks if t.get("status") == "completed"),
            overdue_tasks=sum(1 for t in department_tasks if is_overdue(t, now)),
            average_close_time_hours=mean(times),
        ))
    return breakdown


def get_city_overview(
    city_id: str,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> CityOverview:
    """
    Task summary, priority mix, SLA metrics and department breakdown for a city.

    Returns the all-zero overview when the city has neither teams nor
    departments. The date window applies to ``created_at``.
    """
    store = store or get_analytics_store()
    now = now or utc_now()

    team_ids, department_ids = get_city_teams(city_id, store)
    if not team_ids and not department_ids:
        logger.info(f"City {city_id} has no teams or departments, returning empty overview")
        return CityOverview()

    query = store.table(Tables.TASKS).select_with_relations(TASK_FIELDS, TASK_RELATIONS)
    query = resolve_date_range(date_range).apply(query, "created_at")
    tasks = filter_city_relevant_tasks(query.execute(), team_ids, department_ids)

    summary = CityTaskSummary(total_tasks=len(tasks))
    priorities = PriorityCounts()
    samples = []

    for task in tasks:
        status = task.get("status")
        if status == "completed":
            summary.completed_tasks += 1
        elif status == "in_progress":
            summary.in_progress_tasks += 1
        else:
            summary.todo_tasks += 1

        if is_overdue(task, now):
            summary.overdue_tasks += 1

        # only explicit priorities are counted here
        priority = task.get("priority")
        if priority in PRIORITIES:
            setattr(priorities, priority, getattr(priorities, priority) + 1)

        hours = closure_hours(task)
        if hours is not None:
            samples.append({"time": hours, "priority": priority})

    times = [s["time"] for s in samples]
    sla = CitySLAMetrics(
        average_time_to_close_hours=mean(times),
        median_time_to_close_hours=median(times),
        distribution_by_priority=priority_averages(samples),
    )

    overview = CityOverview(
        summary=summary,
        priority_distribution=priorities,
        sla_metrics=sla,
        department_breakdown=_department_breakdown(tasks, now),
    )
    logger.debug(
        f"City overview {city_id}: {summary.total_tasks} tasks across "
        f"{len(team_ids)} teams and {len(department_ids)} departments"
    )
    return overview


# =========================================================================
# GOAL PROGRESS
# =========================================================================

def get_city_goal_progress(
    city_id: str,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> List[CityGoalProgress]:
    """
    Progress of every goal owned by a department with a team in the city.

    The date window narrows the counted tasks by ``created_at``; goals with
    no task in the window still appear with zero progress.
    """
    store = store or get_analytics_store()
    date_range = resolve_date_range(date_range)

    _, department_ids = get_city_teams(city_id, store)
    if not department_ids:
        return []

    tasks_relation = Relation("tasks", Tables.TASKS, "goal_id", ("id", "status", "created_at"), many=True)
    goals = (
        store.table(Tables.GOALS)
        .select_with_relations(("id", "title", "status", "department_id"), [tasks_relation])
        .filter_in("department_id", department_ids)
        .execute()
    )

    progress = []
    for goal in goals:
        tasks = goal.get("tasks") or []
        if date_range.is_bounded:
            tasks = [t for t in tasks if date_range.contains(t.get("created_at"))]
        completed = sum(1 for t in tasks if t.get("status") == "completed")
        progress.append(CityGoalProgress(
            goal=GoalRef(
                id=goal["id"],
                title=goal.get("title"),
                status=goal.get("status"),
                department_id=goal.get("department_id"),
            ),
            total_tasks=len(tasks),
            completed_tasks=completed,
            progress_percent=percent(completed, len(tasks)),
        ))

    logger.debug(f"City goal progress {city_id}: {len(progress)} goals")
    return progress

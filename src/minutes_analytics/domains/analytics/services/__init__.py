# src/minutes_analytics/domains/analytics/services/__init__.py
"""
Analytics Domain Services

Aggregation engines over the analytics store. Every engine takes a scope
and/or date window plus an optional store, and returns a pydantic report.
"""

from .cities import filter_city_relevant_tasks, get_city_goal_progress, get_city_overview
from .departments import get_department_closure_times
from .goals import get_goal_summary
from .meetings import get_meeting_compliance_analytics
from .scope import DateRange, DepartmentAttribution, ScopeFilter
from .summaries import (
    fetch_closure_time_by_city,
    fetch_closure_time_by_location,
    fetch_closure_time_by_priority,
    fetch_department_progress,
    fetch_tasks_by_city,
    fetch_weighted_avg_closure_time,
)
from .tasks import get_task_completion_time, get_task_progress_by_scope, get_weighted_task_closure_time
from .teams import get_team_closure_times, get_teams_needing_support

__all__ = [
    "DateRange",
    "DepartmentAttribution",
    "ScopeFilter",
    "filter_city_relevant_tasks",
    "get_city_goal_progress",
    "get_city_overview",
    "get_department_closure_times",
    "get_goal_summary",
    "get_meeting_compliance_analytics",
    "get_task_completion_time",
    "get_task_progress_by_scope",
    "get_team_closure_times",
    "get_teams_needing_support",
    "get_weighted_task_closure_time",
    "fetch_closure_time_by_city",
    "fetch_closure_time_by_location",
    "fetch_closure_time_by_priority",
    "fetch_department_progress",
    "fetch_tasks_by_city",
    "fetch_weighted_avg_closure_time",
]

# src/minutes_analytics/domains/analytics/api/tasks.py
"""
Task Analytics API Routes
"""

from fastapi import APIRouter, Depends

from ..models import TaskClosureTimeStats, TaskProgressStats, WeightedClosureStats
from ..services.scope import DateRange, ScopeFilter
from ..services.tasks import (
    get_task_completion_time,
    get_task_progress_by_scope,
    get_weighted_task_closure_time,
)
from .deps import date_range_params, run_report, scope_params

router = APIRouter(prefix="/tasks", tags=["analytics-tasks"])


@router.get("/progress", response_model=TaskProgressStats)
async def task_progress(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    """Status distribution, period activity and overdue sample for tasks created in the window."""
    return await run_report(get_task_progress_by_scope, scope, date_range)


@router.get("/completion-time", response_model=TaskClosureTimeStats)
async def task_completion_time(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    return await run_report(get_task_completion_time, scope, date_range)


@router.get("/weighted-closure-time", response_model=WeightedClosureStats)
async def weighted_closure_time(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    return await run_report(get_weighted_task_closure_time, scope, date_range)

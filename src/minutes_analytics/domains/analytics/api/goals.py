# src/minutes_analytics/domains/analytics/api/goals.py
"""
Goal Analytics API Routes
"""

from typing import List

from fastapi import APIRouter, Depends

from ..models import GoalSummary
from ..services.goals import get_goal_summary
from ..services.scope import DateRange, ScopeFilter
from .deps import date_range_params, run_report, scope_params

router = APIRouter(prefix="/goals", tags=["analytics-goals"])


@router.get("/summary", response_model=List[GoalSummary])
async def goal_summary(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    return await run_report(get_goal_summary, scope, date_range)

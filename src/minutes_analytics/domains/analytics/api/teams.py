# src/minutes_analytics/domains/analytics/api/teams.py
"""
Team Analytics API Routes
"""

from typing import List

from fastapi import APIRouter, Depends

from ..models import TeamClosureMetric, TeamSupportMetric
from ..services.scope import DateRange, ScopeFilter
from ..services.teams import get_team_closure_times, get_teams_needing_support
from .deps import date_range_params, run_report, scope_params

router = APIRouter(prefix="/teams", tags=["analytics-teams"])


@router.get("/closure-times", response_model=List[TeamClosureMetric])
async def team_closure_times(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    return await run_report(get_team_closure_times, scope, date_range)


@router.get("/needing-support", response_model=List[TeamSupportMetric])
async def teams_needing_support(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    """Teams ranked by critical issues, most first."""
    return await run_report(get_teams_needing_support, scope, date_range)

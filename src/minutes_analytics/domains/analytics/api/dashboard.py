# src/minutes_analytics/domains/analytics/api/dashboard.py
"""
Analytics Dashboard API

One request, six reports. The reports are independent reads, so they run
concurrently in worker threads. If any of them fails the whole request fails.
"""

import asyncio
import logging
import time

from fastapi import APIRouter, Depends

from ..models import AnalyticsDashboard
from ..services.departments import get_department_closure_times
from ..services.goals import get_goal_summary
from ..services.meetings import get_meeting_compliance_analytics
from ..services.scope import DateRange, ScopeFilter
from ..services.tasks import get_task_progress_by_scope, get_weighted_task_closure_time
from ..services.teams import get_teams_needing_support
from .deps import date_range_params, run_report, scope_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics-dashboard"])


@router.get("/dashboard", response_model=AnalyticsDashboard)
async def analytics_dashboard(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
) -> AnalyticsDashboard:
    """Task progress, weighted closure, team support, department closure, goals and meetings."""
    start_time = time.time()

    reports = [
        get_task_progress_by_scope,
        get_weighted_task_closure_time,
        get_teams_needing_support,
        get_department_closure_times,
        get_goal_summary,
        get_meeting_compliance_analytics,
    ]
    (
        task_progress,
        weighted_closure,
        teams_needing_support,
        department_closure,
        goals,
        meeting_compliance,
    ) = await asyncio.gather(*[run_report(report, scope, date_range) for report in reports])

    logger.info(f"Dashboard [{scope.describe()}] built in {(time.time() - start_time) * 1000:.0f}ms")
    return AnalyticsDashboard(
        task_progress=task_progress,
        weighted_closure=weighted_closure,
        teams_needing_support=teams_needing_support,
        department_closure=department_closure,
        goals=goals,
        meeting_compliance=meeting_compliance,
    )

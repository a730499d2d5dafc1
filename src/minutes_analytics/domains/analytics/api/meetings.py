# src/minutes_analytics/domains/analytics/api/meetings.py
"""
Meeting Compliance API Routes
"""

from fastapi import APIRouter, Depends

from ..models import MeetingComplianceStats
from ..services.meetings import get_meeting_compliance_analytics
from ..services.scope import DateRange, ScopeFilter
from .deps import date_range_params, run_report, scope_params

router = APIRouter(prefix="/meetings", tags=["analytics-meetings"])


@router.get("/compliance", response_model=MeetingComplianceStats)
async def meeting_compliance(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    """Meeting status tally and per-meeting task follow-through, by meeting date."""
    return await run_report(get_meeting_compliance_analytics, scope, date_range)

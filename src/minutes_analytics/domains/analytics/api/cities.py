# src/minutes_analytics/domains/analytics/api/cities.py
"""
City Analytics API Routes
"""

from typing import List

from fastapi import APIRouter, Depends

from ..models import CityGoalProgress, CityOverview
from ..services.cities import get_city_goal_progress, get_city_overview
from ..services.scope import DateRange
from .deps import date_range_params, run_report

router = APIRouter(prefix="/cities", tags=["analytics-cities"])


@router.get("/{city_id}/overview", response_model=CityOverview)
async def city_overview(city_id: str, date_range: DateRange = Depends(date_range_params)):
    """Summary, priority mix, SLA metrics and department breakdown for one city."""
    return await run_report(get_city_overview, city_id, date_range)


@router.get("/{city_id}/goals", response_model=List[CityGoalProgress])
async def city_goal_progress(city_id: str, date_range: DateRange = Depends(date_range_params)):
    return await run_report(get_city_goal_progress, city_id, date_range)

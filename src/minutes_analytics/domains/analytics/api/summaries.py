# src/minutes_analytics/domains/analytics/api/summaries.py
"""
Precomputed Summary API Routes

Thin pass-through to the database-side summary functions.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..models import (
    CityTasksOverview,
    ClosureTimeByCity,
    ClosureTimeByLocation,
    ClosureTimeByPriority,
    DepartmentProgress,
    WeightedAvgClosureTime,
)
from ..services import summaries
from ..services.scope import DateRange
from .deps import date_range_params, run_report

router = APIRouter(prefix="/summaries", tags=["analytics-summaries"])


@router.get("/tasks-by-city", response_model=List[CityTasksOverview])
async def tasks_by_city(date_range: DateRange = Depends(date_range_params)):
    return await run_report(summaries.fetch_tasks_by_city, date_range)


@router.get("/department-progress", response_model=List[DepartmentProgress])
async def department_progress(
    city_id: Optional[str] = Query(None, description="Limit to one city"),
    date_range: DateRange = Depends(date_range_params),
):
    return await run_report(summaries.fetch_department_progress, city_id, date_range)


@router.get("/closure-by-priority", response_model=List[ClosureTimeByPriority])
async def closure_by_priority(date_range: DateRange = Depends(date_range_params)):
    return await run_report(summaries.fetch_closure_time_by_priority, date_range)


@router.get("/weighted-closure", response_model=Optional[WeightedAvgClosureTime])
async def weighted_closure(date_range: DateRange = Depends(date_range_params)):
    return await run_report(summaries.fetch_weighted_avg_closure_time, date_range)


@router.get("/closure-by-location", response_model=List[ClosureTimeByLocation])
async def closure_by_location(date_range: DateRange = Depends(date_range_params)):
    return await run_report(summaries.fetch_closure_time_by_location, date_range)


@router.get("/closure-by-city", response_model=List[ClosureTimeByCity])
async def closure_by_city(date_range: DateRange = Depends(date_range_params)):
    return await run_report(summaries.fetch_closure_time_by_city, date_range)

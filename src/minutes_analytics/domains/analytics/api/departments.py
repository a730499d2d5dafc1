# src/minutes_analytics/domains/analytics/api/departments.py
"""
Department Analytics API Routes
"""

from typing import List

from fastapi import APIRouter, Depends

from ..models import DepartmentClosureMetric
from ..services.departments import get_department_closure_times
from ..services.scope import DateRange, ScopeFilter
from .deps import date_range_params, run_report, scope_params

router = APIRouter(prefix="/departments", tags=["analytics-departments"])


@router.get("/closure-times", response_model=List[DepartmentClosureMetric])
async def department_closure_times(
    scope: ScopeFilter = Depends(scope_params),
    date_range: DateRange = Depends(date_range_params),
):
    return await run_report(get_department_closure_times, scope, date_range)

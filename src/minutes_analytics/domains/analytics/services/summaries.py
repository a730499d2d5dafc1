# src/minutes_analytics/domains/analytics/services/summaries.py
"""
Precomputed summary reports backed by database functions.

Each wrapper passes the window as ``date_from`` / ``date_to`` (ISO strings or
null) and validates the returned rows. Errors from the store propagate.
"""

import logging
from typing import Any, Dict, List, Optional

from ....core.container import get_analytics_store
from ....core.ports.store import AnalyticsStore
from ..constants import (
    RPC_CITY_DEPARTMENT_PROGRESS,
    RPC_CLOSURE_TIME_BY_CITY,
    RPC_CLOSURE_TIME_BY_LOCATION,
    RPC_CLOSURE_TIME_BY_PRIORITY,
    RPC_TASKS_BY_CITY,
    RPC_WEIGHTED_AVG_CLOSURE_TIME,
)
from ..models import (
    CityTasksOverview,
    ClosureTimeByCity,
    ClosureTimeByLocation,
    ClosureTimeByPriority,
    DepartmentProgress,
    WeightedAvgClosureTime,
)
from .scope import DateRange, resolve_date_range

logger = logging.getLogger(__name__)


def _call(
    function_name: str,
    date_range: Optional[DateRange],
    store: Optional[AnalyticsStore],
    **extra: Any,
) -> List[Dict[str, Any]]:
    store = store or get_analytics_store()
    params = {**extra, **resolve_date_range(date_range).to_rpc_params()}
    rows = store.rpc(function_name, params) or []
    logger.debug(f"rpc {function_name} returned {len(rows)} rows")
    return rows


def fetch_tasks_by_city(
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> List[CityTasksOverview]:
    """Task status breakdown per city."""
    return [CityTasksOverview(**row) for row in _call(RPC_TASKS_BY_CITY, date_range, store)]


def fetch_department_progress(
    city_id: Optional[str] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> List[DepartmentProgress]:
    """Task progress per department, optionally limited to one city."""
    rows = _call(RPC_CITY_DEPARTMENT_PROGRESS, date_range, store, filter_city_id=city_id)
    return [DepartmentProgress(**row) for row in rows]


def fetch_closure_time_by_priority(
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> List[ClosureTimeByPriority]:
    return [ClosureTimeByPriority(**row) for row in _call(RPC_CLOSURE_TIME_BY_PRIORITY, date_range, store)]


def fetch_weighted_avg_closure_time(
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> Optional[WeightedAvgClosureTime]:
    """Weighted closure time across priorities; None when the function returns no row."""
    rows = _call(RPC_WEIGHTED_AVG_CLOSURE_TIME, date_range, store)
    return WeightedAvgClosureTime(**rows[0]) if rows else None


def fetch_closure_time_by_location(
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> List[ClosureTimeByLocation]:
    """Closure time per city and department."""
    return [ClosureTimeByLocation(**row) for row in _call(RPC_CLOSURE_TIME_BY_LOCATION, date_range, store)]


def fetch_closure_time_by_city(
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
) -> List[ClosureTimeByCity]:
    return [ClosureTimeByCity(**row) for row in _call(RPC_CLOSURE_TIME_BY_CITY, date_range, store)]

# src/minutes_analytics/domains/analytics/api/deps.py
"""
Shared request parsing and report execution for the analytics routes.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from fastapi import HTTPException, Query, status
from pydantic import ValidationError

from ..services.scope import DateRange, ScopeFilter

logger = logging.getLogger(__name__)


def _unprocessable(error: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in error.errors()],
    )


def scope_params(
    org_scope: bool = Query(False, description="Whole organization; excludes the other filters"),
    city_id: Optional[str] = Query(None, description="Tasks whose assignee's team is in this city"),
    department_id: Optional[str] = Query(None, description="Department filter"),
    team_id: Optional[str] = Query(None, description="Tasks whose assignee is on this team"),
) -> ScopeFilter:
    try:
        return ScopeFilter(org_scope=org_scope, city_id=city_id, department_id=department_id, team_id=team_id)
    except ValidationError as e:
        raise _unprocessable(e)


def date_range_params(
    date_from: Optional[str] = Query(None, alias="from", description="ISO date/datetime, inclusive"),
    date_to: Optional[str] = Query(None, alias="to", description="ISO date/datetime, inclusive"),
) -> DateRange:
    try:
        return DateRange(start=date_from, end=date_to)
    except ValidationError as e:
        raise _unprocessable(e)


async def run_report(report: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Run a synchronous report in a worker thread.

    Any failure inside the report is a store failure by the time it gets
    here, since inputs were validated on the way in. It surfaces as 502.
    """
    try:
        return await asyncio.to_thread(report, *args, **kwargs)
    except Exception as e:
        logger.error(f"Analytics report {report.__name__} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Analytics store unavailable")

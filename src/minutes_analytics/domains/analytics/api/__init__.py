# src/minutes_analytics/domains/analytics/api/__init__.py
"""
Analytics API Router

Combines all analytics sub-routers under /api/analytics.
"""

from fastapi import APIRouter

from .cities import router as cities_router
from .dashboard import router as dashboard_router
from .departments import router as departments_router
from .goals import router as goals_router
from .meetings import router as meetings_router
from .summaries import router as summaries_router
from .tasks import router as tasks_router
from .teams import router as teams_router

# Create combined router with /api/analytics prefix
router = APIRouter(prefix="/api/analytics", tags=["analytics"])

# Include sub-routers
router.include_router(tasks_router)
router.include_router(teams_router)
router.include_router(departments_router)
router.include_router(cities_router)
router.include_router(goals_router)
router.include_router(meetings_router)
router.include_router(summaries_router)
router.include_router(dashboard_router)

__all__ = ["router"]

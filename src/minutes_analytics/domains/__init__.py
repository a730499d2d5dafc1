# src/minutes_analytics/domains/__init__.py
"""
Domain Layer - Business domains organized by bounded context

Each domain folder contains:
- api/       - HTTP route handlers (thin controllers)
- services/  - Business logic
- models.py  - Report models
- constants.py

Available domains:
- analytics/ - Meeting-minutes task analytics

Usage:
    from minutes_analytics.domains.analytics import analytics_router
"""

__all__ = [
    "analytics",
]

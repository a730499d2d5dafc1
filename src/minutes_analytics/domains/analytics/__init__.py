# src/minutes_analytics/domains/analytics/__init__.py
"""
Analytics Domain - Task, team, department, city, goal and meeting reports

Submodules:
- services/scope.py       - Scope filter and date window
- services/utils.py       - Overdue, weighting and closure-time rules
- services/tasks.py       - Task progress and closure time
- services/teams.py       - Team closure and support ranking
- services/departments.py - Department closure times
- services/cities.py      - City overview and city goal progress
- services/goals.py       - Goal summary
- services/meetings.py    - Meeting compliance
- services/summaries.py   - Database-side precomputed summaries

- api/       - HTTP routes under /api/analytics
- models.py  - Report models
- constants.py
"""

from .api import router as analytics_router

__all__ = ["analytics_router"]

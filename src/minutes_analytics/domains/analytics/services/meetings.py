# src/minutes_analytics/domains/analytics/services/meetings.py
"""
Meeting Compliance Engine

Meetings carry no department, team or city of their own; they relate to the
organization through the tasks extracted from them. Scope is therefore
applied to each meeting's tasks, and a scoped report drops meetings left
with no task.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ....core.container import get_analytics_store
from ....core.models import Tables
from ....core.ports.store import AnalyticsStore, Relation
from ....shared.utils import safe_get, utc_now
from ..constants import MEETING_STATUSES
from ..models import EntityRef, MeetingComplianceStats, MeetingSummary
from .scope import DateRange, ScopeFilter, resolve_date_range
from .utils import is_critical_issue

logger = logging.getLogger(__name__)

MEETING_FIELDS = ("id", "title", "date", "status", "summary")

MEETING_TASKS_RELATION = Relation(
    "tasks",
    Tables.TASKS,
    "meeting_id",
    ("id", "title", "status", "priority", "due_date", "created_at", "updated_at", "department_id"),
    many=True,
    relations=(
        Relation("department", Tables.DEPARTMENTS, "department_id", ("id", "name")),
        Relation(
            "assignee",
            Tables.PROFILES,
            "assignee_id",
            ("id",),
            relations=(Relation("team", Tables.TEAMS, "team_id", ("id", "name", "city_id", "department_id")),),
        ),
    ),
)


def _summarize_meeting(meeting: Dict[str, Any], tasks: List[Dict[str, Any]], now: datetime) -> MeetingSummary:
    departments: Dict[str, Optional[str]] = {}
    teams: Dict[str, Optional[str]] = {}
    for task in tasks:
        department = task.get("department")
        if department:
            departments.setdefault(department["id"], department.get("name"))
        team = safe_get(task, "assignee", "team")
        if team:
            teams.setdefault(team["id"], team.get("name"))

    completed = sum(1 for t in tasks if t.get("status") == "completed")
    return MeetingSummary(
        meeting_id=meeting["id"],
        meeting_title=meeting.get("title"),
        date=meeting.get("date"),
        status=meeting.get("status"),
        total_tasks=len(tasks),
        completed_tasks=completed,
        open_tasks=len(tasks) - completed,
        critical_issues=sum(1 for t in tasks if is_critical_issue(t, now)),
        departments_involved=[EntityRef(id=k, name=v) for k, v in departments.items()],
        teams_involved=[EntityRef(id=k, name=v) for k, v in teams.items()],
    )


def get_meeting_compliance_analytics(
    scope: Optional[ScopeFilter] = None,
    date_range: Optional[DateRange] = None,
    *,
    store: Optional[AnalyticsStore] = None,
    now: Optional[datetime] = None,
) -> MeetingComplianceStats:
    """
    Meeting status tally plus per-meeting task follow-through.

    The date window applies to the meeting ``date``. Meetings with a status
    outside processing/completed/failed count towards total_meetings only.
    """
    scope = scope or ScopeFilter()
    store = store or get_analytics_store()
    now = now or utc_now()

    query = store.table(Tables.MEETINGS).select_with_relations(MEETING_FIELDS, [MEETING_TASKS_RELATION])
    meetings = resolve_date_range(date_range).apply(query, "date").execute()

    stats = MeetingComplianceStats()
    for meeting in meetings:
        tasks = [t for t in meeting.get("tasks") or [] if scope.matches_task(t)]
        if scope.has_filters and not tasks:
            continue

        stats.summary.total_meetings += 1
        status = meeting.get("status")
        if status in MEETING_STATUSES:
            setattr(stats.summary, status, getattr(stats.summary, status) + 1)

        stats.meetings.append(_summarize_meeting(meeting, tasks, now))

    logger.debug(
        f"Meeting compliance [{scope.describe()}]: {stats.summary.total_meetings} "
        f"of {len(meetings)} meetings in scope"
    )
    return stats

# src/minutes_analytics/domains/analytics/services/scope.py
"""
Scope Filter Model

A report covers one slice of the organization (org-wide, city, department,
team) and optionally a date window. This module turns that description into
store filters, and into an in-memory predicate for rows that were fetched
already joined.

Resolution rules:
- city or team given: match through ``task.assignee -> team`` with inner-join
  semantics, so tasks without an assignee (or whose assignee has no team)
  drop out of the report
- department only: match ``task.department_id`` directly, no join, so
  unassigned tasks stay in
- department together with city/team: both predicates must hold
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ....core.models import Tables
from ....core.ports.store import QueryBuilder, Relation
from ....shared.utils import Timestamp, parse_timestamp, safe_get


class DepartmentAttribution(str, Enum):
    """
    Which department a task belongs to for a given report.

    DIRECT: the task's own ``department_id``.
    TEAM: the department of the assignee's team.

    The two can disagree for the same task; each report names the one it uses.
    """
    DIRECT = "direct"
    TEAM = "team"


class DateRange(BaseModel):
    """Inclusive ``[from, to]`` window; either bound may be open."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start: Optional[datetime] = Field(default=None, alias="from")
    end: Optional[datetime] = Field(default=None, alias="to")

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_bound(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.start and self.end and self.start > self.end:
            raise ValueError("'from' must not be after 'to'")
        return self

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None

    def contains(self, value: Optional[Timestamp]) -> bool:
        """True when ``value`` falls inside the window; a missing value never does."""
        moment = parse_timestamp(value)
        if moment is None:
            return False
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True

    def apply(self, query: QueryBuilder, field: str) -> QueryBuilder:
        """Add the window as a range filter on ``field``."""
        if self.is_bounded:
            query = query.filter_range(field, self.start, self.end)
        return query

    def to_rpc_params(self) -> Dict[str, Optional[str]]:
        return {
            "date_from": self.start.isoformat() if self.start else None,
            "date_to": self.end.isoformat() if self.end else None,
        }


class ScopeFilter(BaseModel):
    """Which part of the organization a report covers."""

    model_config = ConfigDict(frozen=True)

    org_scope: bool = False
    city_id: Optional[str] = None
    department_id: Optional[str] = None
    team_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_org_scope(self) -> "ScopeFilter":
        if self.org_scope and self.has_filters:
            raise ValueError("org_scope cannot be combined with city, department or team filters")
        return self

    @property
    def has_filters(self) -> bool:
        """True when any of city/department/team narrows the report."""
        return bool(self.city_id or self.department_id or self.team_id)

    def requires_team_join(self, attribution: DepartmentAttribution = DepartmentAttribution.DIRECT) -> bool:
        """Whether matching needs the ``assignee -> team`` inner join."""
        if self.city_id or self.team_id:
            return True
        return attribution is DepartmentAttribution.TEAM and bool(self.department_id)

    def assignee_relation(
        self,
        team_fields: Sequence[str] = ("id", "city_id"),
        inner: Optional[bool] = None,
        attribution: DepartmentAttribution = DepartmentAttribution.DIRECT,
    ) -> Relation:
        """
        The ``assignee -> team`` relation for a task select.

        Inner by default only when the scope needs the join to match.
        """
        if inner is None:
            inner = self.requires_team_join(attribution)
        team = Relation("team", Tables.TEAMS, "team_id", tuple(team_fields), inner=inner)
        return Relation("assignee", Tables.PROFILES, "assignee_id", ("id",), inner=inner, relations=(team,))

    def apply_to_task_query(
        self,
        query: QueryBuilder,
        attribution: DepartmentAttribution = DepartmentAttribution.DIRECT,
    ) -> QueryBuilder:
        """
        Add the scope predicates to a task query.

        The query must already select ``assignee_relation()`` when
        ``requires_team_join(attribution)`` is true.
        """
        if self.department_id:
            if attribution is DepartmentAttribution.TEAM:
                query = query.filter_join_equals("assignee.team.department_id", self.department_id)
            else:
                query = query.filter_equals("department_id", self.department_id)
        if self.city_id:
            query = query.filter_join_equals("assignee.team.city_id", self.city_id)
        if self.team_id:
            query = query.filter_join_equals("assignee.team.id", self.team_id)
        return query

    def matches_task(self, task: Dict[str, Any]) -> bool:
        """
        In-memory version of the scope for an already-joined task row.

        Expects ``department_id`` and an outer-joined ``assignee.team``.
        """
        if self.city_id and safe_get(task, "assignee", "team", "city_id") != self.city_id:
            return False
        if self.department_id and task.get("department_id") != self.department_id:
            return False
        if self.team_id and safe_get(task, "assignee", "team", "id") != self.team_id:
            return False
        return True

    def describe(self) -> str:
        """Short label for log lines."""
        if not self.has_filters:
            return "org"
        parts = [
            f"{label}={value}"
            for label, value in (
                ("city", self.city_id),
                ("department", self.department_id),
                ("team", self.team_id),
            )
            if value
        ]
        return " ".join(parts)


def resolve_date_range(date_range: Optional[DateRange]) -> DateRange:
    """Treat a missing window as unbounded."""
    return date_range if date_range is not None else DateRange()

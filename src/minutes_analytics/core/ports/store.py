# src/minutes_analytics/core/ports/store.py
"""
Analytics Store Port Interface

Abstract read-only query capability the analytics engines depend on.
Implementations:
- SupabaseAnalyticsStore (production, PostgREST)
- InMemoryAnalyticsStore (local development and tests)

The engines never talk to a concrete client. They build queries with
select_with_relations / filter_* and call execute().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple


Row = Dict[str, Any]


@dataclass(frozen=True)
class Relation:
    """
    One embedded relation in a select.

    For a to-one relation, ``foreign_key`` is the column on the parent row
    that points at ``table.id`` (e.g. ``tasks.assignee_id -> profiles.id``).
    For a to-many relation (``many=True``), ``foreign_key`` is the column on
    the child rows that points back at the parent id
    (e.g. ``tasks.goal_id -> goals.id``).

    ``inner=True`` gives inner-join semantics: parent rows whose relation
    resolves to nothing are dropped from the result.
    """
    name: str
    table: str
    foreign_key: str
    fields: Tuple[str, ...] = ("*",)
    many: bool = False
    inner: bool = False
    relations: Tuple["Relation", ...] = ()


class QueryBuilder(ABC):
    """
    Chainable query over one table.

    Every filter method returns the builder so calls can be chained, the
    same way the PostgREST client reads.
    """

    @abstractmethod
    def select_with_relations(
        self,
        fields: Sequence[str] = ("*",),
        relations: Iterable[Relation] = (),
    ) -> "QueryBuilder":
        """Choose columns and embedded relations to return per row."""
        pass

    @abstractmethod
    def filter_equals(self, field: str, value: Any) -> "QueryBuilder":
        """Keep rows where ``field == value``."""
        pass

    @abstractmethod
    def filter_not_null(self, field: str) -> "QueryBuilder":
        """Keep rows where ``field`` is not null."""
        pass

    @abstractmethod
    def filter_in(self, field: str, values: Sequence[Any]) -> "QueryBuilder":
        """Keep rows where ``field`` is one of ``values``."""
        pass

    @abstractmethod
    def filter_range(
        self,
        field: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> "QueryBuilder":
        """Keep rows with ``start <= field <= end``; a missing bound is open."""
        pass

    @abstractmethod
    def filter_join_equals(self, path: str, value: Any) -> "QueryBuilder":
        """
        Filter on a column of an embedded relation.

        ``path`` is dotted, e.g. ``assignee.team.city_id``. The relations along
        the path must be selected with ``inner=True``; rows that do not match
        are dropped.
        """
        pass

    @abstractmethod
    def execute(self) -> List[Row]:
        """Run the query. Failures propagate to the caller."""
        pass


class AnalyticsStore(ABC):
    """
    Abstract port for the external store.

    All adapters must implement this interface so the engines can switch
    between Supabase and the in-memory store without code changes.
    """

    @abstractmethod
    def table(self, name: str) -> QueryBuilder:
        """Start a query on ``name``."""
        pass

    @abstractmethod
    def rpc(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> List[Row]:
        """Call a stored procedure and return its rows."""
        pass


RpcHandler = Callable[[Dict[str, Any]], List[Row]]

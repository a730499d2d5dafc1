# src/minutes_analytics/adapters/database/memory.py
"""
In-Memory Analytics Store Adapter

Implements the AnalyticsStore port over plain dict rows held in memory.
Used for local development (seeded from a JSON export) and in tests.

Relation resolution mirrors PostgREST embedding:
- to-one relations resolve ``parent[foreign_key] -> child.id``
- to-many relations resolve ``child[foreign_key] -> parent.id``
- ``inner=True`` drops parent rows whose relation resolves to nothing
"""

import copy
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from ...core.ports.store import AnalyticsStore, QueryBuilder, Relation, Row, RpcHandler
from ...shared.utils import parse_timestamp

logger = logging.getLogger(__name__)

RowFilter = Callable[[Row], bool]

# Sentinel for an inner relation that did not resolve
_MISSING = object()


class InMemoryQueryBuilder(QueryBuilder):
    """Query over one in-memory table."""

    def __init__(self, store: "InMemoryAnalyticsStore", table: str):
        self._store = store
        self._table = table
        self._fields: Sequence[str] = ("*",)
        self._relations: List[Relation] = []
        self._row_filters: List[RowFilter] = []
        self._join_filters: List[RowFilter] = []

    def select_with_relations(
        self,
        fields: Sequence[str] = ("*",),
        relations: Iterable[Relation] = (),
    ) -> "InMemoryQueryBuilder":
        self._fields = tuple(fields)
        self._relations = list(relations)
        return self

    def filter_equals(self, field: str, value: Any) -> "InMemoryQueryBuilder":
        self._row_filters.append(lambda row: row.get(field) == value)
        return self

    def filter_not_null(self, field: str) -> "InMemoryQueryBuilder":
        self._row_filters.append(lambda row: row.get(field) is not None)
        return self

    def filter_in(self, field: str, values: Sequence[Any]) -> "InMemoryQueryBuilder":
        allowed = set(values)
        self._row_filters.append(lambda row: row.get(field) in allowed)
        return self

    def filter_range(
        self,
        field: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> "InMemoryQueryBuilder":
        def in_range(row: Row) -> bool:
            value = parse_timestamp(row.get(field))
            if value is None:
                # NULL never satisfies a comparison in SQL
                return start is None and end is None
            if start is not None and value < start:
                return False
            if end is not None and value > end:
                return False
            return True

        self._row_filters.append(in_range)
        return self

    def filter_join_equals(self, path: str, value: Any) -> "InMemoryQueryBuilder":
        keys = path.split(".")

        def matches(row: Row) -> bool:
            current: Any = row
            for key in keys:
                if not isinstance(current, dict):
                    return False
                current = current.get(key)
            return current == value

        self._join_filters.append(matches)
        return self

    def execute(self) -> List[Row]:
        results = []
        for row in self._store.rows(self._table):
            if not all(check(row) for check in self._row_filters):
                continue
            projected = self._store.project(row, self._fields, self._relations)
            if projected is None:
                continue
            if all(check(projected) for check in self._join_filters):
                results.append(projected)
        logger.debug(f"Fetched {len(results)} rows from {self._table}")
        return results


class InMemoryAnalyticsStore(AnalyticsStore):
    """
    In-memory implementation of AnalyticsStore.

    Rows are deep-copied on the way in and out so callers can never mutate
    the stored data.
    """

    def __init__(self, tables: Optional[Dict[str, List[Row]]] = None):
        self._tables: Dict[str, List[Row]] = {}
        self._rpc_handlers: Dict[str, RpcHandler] = {}
        for name, rows in (tables or {}).items():
            self.seed(name, rows)
        logger.info(f"InMemoryAnalyticsStore initialized with {len(self._tables)} tables")

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "InMemoryAnalyticsStore":
        """
        Load a store from a JSON export shaped ``{"<table>": [rows...]}``.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a JSON object of row lists.
        """
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            raise ValueError(f"Seed file {path} must map table names to lists of rows")
        logger.info(f"Seeding in-memory store from {path}")
        return cls(data)

    # =========================================================================
    # DATA MANAGEMENT
    # =========================================================================

    def seed(self, table: str, rows: List[Row]) -> None:
        """Replace the rows of ``table``."""
        self._tables[table] = copy.deepcopy(list(rows))

    def register_rpc(self, function_name: str, handler: Union[RpcHandler, List[Row]]) -> None:
        """Register a stored-procedure stand-in: a callable or static rows."""
        if callable(handler):
            self._rpc_handlers[function_name] = handler
        else:
            rows = copy.deepcopy(list(handler))
            self._rpc_handlers[function_name] = lambda params: copy.deepcopy(rows)

    def clear(self) -> None:
        """Clear all data and rpc handlers."""
        self._tables.clear()
        self._rpc_handlers.clear()

    def rows(self, table: str) -> List[Row]:
        """Raw rows of ``table`` (empty if never seeded)."""
        return self._tables.get(table, [])

    # =========================================================================
    # PORT
    # =========================================================================

    def table(self, name: str) -> InMemoryQueryBuilder:
        return InMemoryQueryBuilder(self, name)

    def rpc(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> List[Row]:
        handler = self._rpc_handlers.get(function_name)
        if handler is None:
            logger.error(f"Error calling rpc {function_name}: not registered")
            raise LookupError(f"Unknown rpc function: {function_name}")
        return handler(dict(params or {}))

    # =========================================================================
    # RELATION RESOLUTION
    # =========================================================================

    def project(self, row: Row, fields: Sequence[str], relations: Iterable[Relation]) -> Optional[Row]:
        """
        Copy the selected columns of ``row`` and embed its relations.

        Returns None when an inner relation does not resolve.
        """
        if "*" in fields:
            projected = copy.deepcopy(row)
        else:
            projected = {field: copy.deepcopy(row.get(field)) for field in fields}

        for relation in relations:
            resolved = self._resolve(row, relation)
            if resolved is _MISSING:
                return None
            projected[relation.name] = resolved
        return projected

    def _resolve(self, row: Row, relation: Relation) -> Any:
        target = self.rows(relation.table)

        if relation.many:
            parent_id = row.get("id")
            children = []
            for child in target:
                if parent_id is None or child.get(relation.foreign_key) != parent_id:
                    continue
                projected = self.project(child, relation.fields, relation.relations)
                if projected is not None:
                    children.append(projected)
            if relation.inner and not children:
                return _MISSING
            return children

        key = row.get(relation.foreign_key)
        match = None
        if key is not None:
            match = next((child for child in target if child.get("id") == key), None)
        projected = self.project(match, relation.fields, relation.relations) if match else None
        if projected is None and relation.inner:
            return _MISSING
        return projected

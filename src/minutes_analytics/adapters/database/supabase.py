# src/minutes_analytics/adapters/database/supabase.py
"""
Supabase Analytics Store Adapter

Implements the AnalyticsStore port on top of Supabase's PostgREST API.
This is the primary production adapter.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from supabase import Client

from ...core.ports.store import AnalyticsStore, QueryBuilder, Relation, Row
from ...infrastructure.supabase_client import get_supabase_client
from ...shared.utils import to_iso

logger = logging.getLogger(__name__)


def render_select(fields: Sequence[str], relations: Iterable[Relation] = ()) -> str:
    """
    Render columns and embedded relations as a PostgREST select string.

    >>> render_select(["id"], [Relation("team", "teams", "team_id", ("id",), inner=True)])
    'id, team:teams!team_id!inner(id)'
    """
    parts = list(fields)
    for relation in relations:
        parts.append(_render_relation(relation))
    return ", ".join(parts)


def _render_relation(relation: Relation) -> str:
    hint = f"!{relation.foreign_key}" if relation.foreign_key else ""
    join = "!inner" if relation.inner else ""
    inner = render_select(relation.fields, relation.relations)
    return f"{relation.name}:{relation.table}{hint}{join}({inner})"


class SupabaseQueryBuilder(QueryBuilder):
    """
    Collects filters and replays them on a postgrest request at execute().

    Filters are recorded rather than applied immediately so the select can
    be chosen after filtering, which postgrest-py does not allow.
    """

    def __init__(self, client: Client, table: str):
        self._client = client
        self._table = table
        self._select = "*"
        self._ops: List[Tuple[str, Tuple[Any, ...]]] = []

    def select_with_relations(
        self,
        fields: Sequence[str] = ("*",),
        relations: Iterable[Relation] = (),
    ) -> "SupabaseQueryBuilder":
        self._select = render_select(fields, relations)
        return self

    def filter_equals(self, field: str, value: Any) -> "SupabaseQueryBuilder":
        self._ops.append(("eq", (field, value)))
        return self

    def filter_not_null(self, field: str) -> "SupabaseQueryBuilder":
        self._ops.append(("not_null", (field,)))
        return self

    def filter_in(self, field: str, values: Sequence[Any]) -> "SupabaseQueryBuilder":
        self._ops.append(("in", (field, list(values))))
        return self

    def filter_range(
        self,
        field: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> "SupabaseQueryBuilder":
        if start is not None:
            self._ops.append(("gte", (field, to_iso(start))))
        if end is not None:
            self._ops.append(("lte", (field, to_iso(end))))
        return self

    def filter_join_equals(self, path: str, value: Any) -> "SupabaseQueryBuilder":
        # PostgREST filters embedded resources with dotted column names
        self._ops.append(("eq", (path, value)))
        return self

    def _build(self):
        query = self._client.table(self._table).select(self._select)
        for op, args in self._ops:
            if op == "eq":
                query = query.eq(*args)
            elif op == "not_null":
                query = query.not_.is_(args[0], "null")
            elif op == "in":
                query = query.in_(*args)
            elif op == "gte":
                query = query.gte(*args)
            elif op == "lte":
                query = query.lte(*args)
        return query

    def execute(self) -> List[Row]:
        try:
            result = self._build().execute()
        except Exception as e:
            logger.error(f"Error querying {self._table} ({self._select}): {e}")
            raise
        rows = result.data or []
        logger.debug(f"Fetched {len(rows)} rows from {self._table}")
        return rows


class SupabaseAnalyticsStore(AnalyticsStore):
    """
    Supabase implementation of AnalyticsStore.

    Uses Supabase's PostgREST API for all reads.
    """

    def __init__(self, client: Optional[Client] = None, url: Optional[str] = None, key: Optional[str] = None):
        """
        Initialize Supabase adapter.

        Args:
            client: Existing Supabase client (tests inject a mock here)
            url: Supabase project URL (defaults to SUPABASE_URL env var)
            key: Supabase anon/service key (defaults to SUPABASE_KEY env var)
        """
        self._client = client or get_supabase_client(url, key)

        if self._client is None:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")

        logger.info("SupabaseAnalyticsStore initialized")

    @property
    def client(self) -> Client:
        """Get the underlying Supabase client."""
        return self._client

    def table(self, name: str) -> SupabaseQueryBuilder:
        return SupabaseQueryBuilder(self._client, name)

    def rpc(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> List[Row]:
        try:
            result = self._client.rpc(function_name, params or {}).execute()
        except Exception as e:
            logger.error(f"Error calling rpc {function_name}: {e}")
            raise
        return result.data or []

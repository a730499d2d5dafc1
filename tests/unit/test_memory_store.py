# tests/unit/test_memory_store.py
"""
Unit tests for InMemoryAnalyticsStore.

Covers relation embedding, inner-join pruning, filters and rpc handlers.
"""

import json
from datetime import datetime, timezone

import pytest

from minutes_analytics.adapters.database.memory import InMemoryAnalyticsStore
from minutes_analytics.core.ports.store import Relation

from fixtures.data import make_profile, make_task, make_team

TEAM = Relation("team", "teams", "team_id", ("id", "city_id"), inner=True)
ASSIGNEE = Relation("assignee", "profiles", "assignee_id", ("id",), inner=True, relations=(TEAM,))


@pytest.fixture
def people_store() -> InMemoryAnalyticsStore:
    return InMemoryAnalyticsStore({
        "teams": [make_team("t-1", city_id="c-1"), make_team("t-2", city_id="c-2")],
        "profiles": [make_profile("p-1", "t-1"), make_profile("p-2", "t-2"), make_profile("p-3", None)],
        "tasks": [
            make_task("a", assignee_id="p-1", created_at="2024-06-01T00:00:00Z"),
            make_task("b", assignee_id="p-2", created_at="2024-06-05T00:00:00Z"),
            make_task("c", assignee_id="p-3", created_at="2024-06-10T00:00:00Z"),
            make_task("d", assignee_id=None, created_at="2024-06-15T00:00:00Z"),
        ],
    })


class TestRelations:
    """Tests for relation embedding."""

    def test_inner_join_drops_unresolved(self, people_store):
        rows = people_store.table("tasks").select_with_relations(("id",), [ASSIGNEE]).execute()
        assert [r["id"] for r in rows] == ["a", "b"]
        assert rows[0]["assignee"]["team"] == {"id": "t-1", "city_id": "c-1"}

    def test_outer_join_keeps_rows_with_none(self, people_store):
        outer_team = Relation("team", "teams", "team_id", ("id",))
        outer = Relation("assignee", "profiles", "assignee_id", ("id",), relations=(outer_team,))
        rows = people_store.table("tasks").select_with_relations(("id",), [outer]).execute()
        assert len(rows) == 4
        assert rows[2]["assignee"] == {"id": "p-3", "team": None}
        assert rows[3]["assignee"] is None

    def test_to_many_relation(self, people_store):
        tasks = Relation("tasks", "tasks", "assignee_id", ("id",), many=True)
        rows = people_store.table("profiles").select_with_relations(("id",), [tasks]).execute()
        assert rows[0] == {"id": "p-1", "tasks": [{"id": "a"}]}

    def test_join_filter(self, people_store):
        rows = (
            people_store.table("tasks")
            .select_with_relations(("id",), [ASSIGNEE])
            .filter_join_equals("assignee.team.city_id", "c-2")
            .execute()
        )
        assert [r["id"] for r in rows] == ["b"]


class TestFilters:
    """Tests for row filters."""

    def test_equals_and_in(self, people_store):
        query = people_store.table("tasks").select_with_relations(("id",))
        assert [r["id"] for r in query.filter_in("id", ["a", "c", "z"]).execute()] == ["a", "c"]
        assert people_store.table("tasks").filter_equals("id", "b").execute()[0]["id"] == "b"

    def test_not_null(self, people_store):
        rows = people_store.table("tasks").filter_not_null("assignee_id").execute()
        assert len(rows) == 3

    def test_range_is_inclusive(self, people_store):
        rows = (
            people_store.table("tasks")
            .filter_range(
                "created_at",
                datetime(2024, 6, 5, tzinfo=timezone.utc),
                datetime(2024, 6, 10, tzinfo=timezone.utc),
            )
            .execute()
        )
        assert [r["id"] for r in rows] == ["b", "c"]

    def test_range_excludes_null_values(self, people_store):
        rows = people_store.table("tasks").filter_range("updated_at", datetime(2024, 1, 1, tzinfo=timezone.utc)).execute()
        assert rows == []

    def test_unknown_table_is_empty(self, store):
        assert store.table("nothing").execute() == []


class TestDataManagement:
    """Tests for seeding, isolation and rpc handlers."""

    def test_results_do_not_alias_stored_rows(self, people_store):
        rows = people_store.table("tasks").execute()
        rows[0]["status"] = "mutated"
        assert people_store.rows("tasks")[0]["status"] == "todo"

    def test_register_rpc_rows_and_callable(self, store):
        store.register_rpc("static", [{"x": 1}])
        store.register_rpc("echo", lambda params: [params])
        assert store.rpc("static") == [{"x": 1}]
        assert store.rpc("echo", {"date_from": None}) == [{"date_from": None}]

    def test_unknown_rpc_raises(self, store):
        with pytest.raises(LookupError):
            store.rpc("missing")

    def test_clear(self, people_store):
        people_store.clear()
        assert people_store.rows("tasks") == []

    def test_from_json(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"tasks": [make_task("a")]}))
        assert InMemoryAnalyticsStore.from_json(path).rows("tasks")[0]["id"] == "a"

    def test_from_json_rejects_bad_shape(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(ValueError):
            InMemoryAnalyticsStore.from_json(path)

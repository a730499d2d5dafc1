# tests/unit/test_analytics_utils.py
"""
Unit tests for the shared analytics helpers.

Covers overdue detection, priority weighting, the weighted average,
median, closure-time policies and the critical-issue signal.
"""

import logging
from datetime import datetime, timezone

import pytest

from minutes_analytics.domains.analytics.services.utils import (
    breakdown_priority,
    closure_hours,
    group_tasks_by_department,
    hours_between,
    is_critical_issue,
    is_overdue,
    map_priority_to_db,
    mean,
    mean_or_none,
    median,
    percent,
    priority_weight,
    weighted_average,
)
from minutes_analytics.shared.utils import parse_timestamp, safe_get

from fixtures.data import make_task

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# TIMESTAMPS
# =============================================================================

class TestTimestamps:
    """Tests for timestamp parsing and elapsed hours."""

    def test_parse_z_suffix(self):
        """Z suffix should parse as UTC."""
        assert parse_timestamp("2024-06-01T10:00:00Z") == datetime(2024, 6, 1, 10, tzinfo=timezone.utc)

    def test_parse_offset_normalized_to_utc(self):
        """Offsets should be converted to UTC."""
        assert parse_timestamp("2024-06-01T12:00:00+02:00") == datetime(2024, 6, 1, 10, tzinfo=timezone.utc)

    def test_parse_naive_is_utc(self):
        """Naive datetimes and bare dates are read as UTC."""
        assert parse_timestamp("2024-06-01T10:00:00").tzinfo == timezone.utc
        assert parse_timestamp("2024-06-01") == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_parse_postgrest_timestamptz(self):
        """Trimmed fractional seconds and short offsets come back from the store."""
        parsed = parse_timestamp("2024-01-15T10:30:00.12+00:00")
        assert parsed == datetime(2024, 1, 15, 10, 30, 0, 120000, tzinfo=timezone.utc)
        assert parse_timestamp("2024-01-15T12:30:00.5+02") == datetime(2024, 1, 15, 10, 30, 0, 500000, tzinfo=timezone.utc)
        assert parse_timestamp("2024-01-15T10:30:00+00") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

        assert is_overdue(make_task(status="todo", due_date="2024-06-10T10:30:00.12+00"), NOW)
        assert hours_between("2024-06-01T00:00:00.5+00", "2024-06-01T01:00:00.5+00:00") == 1.0

    def test_parse_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_parse_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("next tuesday")

    def test_hours_between_fractional_and_negative(self):
        assert hours_between("2024-06-01T00:00:00Z", "2024-06-01T01:30:00Z") == 1.5
        assert hours_between("2024-06-01T02:00:00Z", "2024-06-01T00:00:00Z") == -2.0

    def test_safe_get_nested(self):
        row = {"assignee": {"team": {"id": "t-1"}}}
        assert safe_get(row, "assignee", "team", "id") == "t-1"
        assert safe_get({"assignee": None}, "assignee", "team", "id") is None
        assert safe_get({}, "department", "name", default="Unknown") == "Unknown"


# =============================================================================
# OVERDUE
# =============================================================================

class TestIsOverdue:
    """Tests for the overdue rule."""

    def test_past_due_open_task_is_overdue(self):
        assert is_overdue(make_task(status="todo", due_date="2024-06-10"), NOW)
        assert is_overdue(make_task(status="in_progress", due_date="2024-06-10"), NOW)

    def test_completed_task_never_overdue(self):
        """Completed tasks are never overdue, whatever their due date."""
        assert not is_overdue(make_task(status="completed", due_date="2020-01-01"), NOW)

    def test_no_due_date_not_overdue(self):
        assert not is_overdue(make_task(status="todo", due_date=None), NOW)

    def test_future_due_date_not_overdue(self):
        assert not is_overdue(make_task(status="todo", due_date="2024-07-01"), NOW)


# =============================================================================
# PRIORITY
# =============================================================================

class TestPriority:
    """Tests for weights, breakdown buckets and extraction mapping."""

    def test_weights_are_strictly_ordered(self):
        weights = [priority_weight(p) for p in ("urgent", "important", "medium", "low", None)]
        assert weights == [4, 3, 2, 1, 0]

    def test_unknown_priority_weighs_zero(self):
        assert priority_weight("critical") == 0

    def test_breakdown_folds_missing_into_medium(self):
        assert breakdown_priority(None) == "medium"
        assert breakdown_priority("bogus") == "medium"
        assert breakdown_priority("urgent") == "urgent"

    @pytest.mark.parametrize("raw,expected", [
        ("1", "urgent"),
        ("2", "important"),
        ("3", "medium"),
        ("4", "low"),
        (5, "low"),
        ("9", "medium"),
        (None, "medium"),
    ])
    def test_map_priority_to_db(self, raw, expected):
        assert map_priority_to_db(raw) == expected


# =============================================================================
# AGGREGATES
# =============================================================================

class TestAggregates:
    """Tests for weighted average, median, mean and percent."""

    def test_weighted_average_two_entries(self):
        """urgent 10h and low 20h weigh 4 and 1: (40 + 20) / 5 = 12."""
        entries = [{"time": 10, "priority": "urgent"}, {"time": 20, "priority": "low"}]
        assert weighted_average(entries) == 12

    def test_weighted_average_ignores_weightless_entries(self):
        entries = [
            {"time": 10, "priority": "urgent"},
            {"time": 1000, "priority": None},
            {"time": 1000, "priority": "unknown"},
        ]
        assert weighted_average(entries) == 10

    def test_weighted_average_empty(self):
        assert weighted_average([]) == 0
        assert weighted_average([{"time": 5, "priority": None}]) == 0

    def test_median_odd_even_empty(self):
        assert median([5, 1, 3]) == 3
        assert median([4, 1, 3, 2]) == 2.5
        assert median([]) == 0

    def test_median_leaves_input_untouched(self):
        values = [3, 1, 2]
        median(values)
        assert values == [3, 1, 2]

    def test_mean_variants(self):
        assert mean([]) == 0
        assert mean_or_none([]) is None
        assert mean_or_none([1, 2]) == 1.5

    def test_percent_zero_guard(self):
        assert percent(0, 0) == 0
        assert percent(3, 4) == 75

    def test_group_by_department_keeps_insertion_order(self):
        tasks = [
            make_task("a", department_id="d-2"),
            make_task("b", department_id=None),
            make_task("c", department_id="d-1"),
            make_task("d", department_id="d-2"),
        ]
        groups = group_tasks_by_department(tasks)
        assert list(groups) == ["d-2", "unknown", "d-1"]
        assert [t["id"] for t in groups["d-2"]] == ["a", "d"]


# =============================================================================
# CLOSURE TIME
# =============================================================================

class TestClosureHours:
    """Tests for closure time and the negative closure policy."""

    def test_completed_task(self):
        task = make_task(status="completed", created_at="2024-06-01T00:00:00Z", updated_at="2024-06-01T10:00:00Z")
        assert closure_hours(task) == 10

    def test_undefined_for_open_or_missing_updated_at(self):
        assert closure_hours(make_task(status="todo", updated_at="2024-06-02T00:00:00Z")) is None
        assert closure_hours(make_task(status="completed", updated_at=None)) is None

    @pytest.mark.parametrize("policy,expected", [("keep", -5.0), ("clamp", 0.0), ("exclude", None)])
    def test_negative_closure_policy(self, policy, expected):
        task = make_task(status="completed", created_at="2024-06-01T05:00:00Z", updated_at="2024-06-01T00:00:00Z")
        assert closure_hours(task, policy=policy) == expected

    def test_negative_closure_defaults_to_keep_and_warns(self, caplog):
        task = make_task("inverted", status="completed", created_at="2024-06-01T05:00:00Z", updated_at="2024-06-01T00:00:00Z")
        with caplog.at_level(logging.WARNING):
            assert closure_hours(task) == -5.0
        assert "inverted" in caplog.text

    def test_policy_from_environment(self, monkeypatch):
        from minutes_analytics.config import reload_config

        monkeypatch.setenv("MINUTES_NEGATIVE_CLOSURE_POLICY", "clamp")
        reload_config()
        task = make_task(status="completed", created_at="2024-06-01T05:00:00Z", updated_at="2024-06-01T00:00:00Z")
        assert closure_hours(task) == 0.0


# =============================================================================
# CRITICAL ISSUES
# =============================================================================

class TestCriticalIssue:
    """Tests for the composite critical-issue signal."""

    def test_overdue_is_critical(self):
        assert is_critical_issue(make_task(priority="low", due_date="2024-06-01"), NOW)

    def test_urgent_is_critical_even_when_completed(self):
        assert is_critical_issue(make_task(status="completed", priority="urgent"), NOW)

    def test_stale_in_progress_is_critical(self):
        task = make_task(status="in_progress", priority="low", created_at="2024-06-01T00:00:00Z")
        assert is_critical_issue(task, NOW, stale_days=7)

    def test_recent_in_progress_is_not_critical(self):
        task = make_task(status="in_progress", priority="low", created_at="2024-06-12T00:00:00Z")
        assert not is_critical_issue(task, NOW, stale_days=7)

    def test_stale_threshold_is_configurable(self):
        task = make_task(status="in_progress", priority="low", created_at="2024-06-12T00:00:00Z")
        assert is_critical_issue(task, NOW, stale_days=1)

    def test_plain_task_is_not_critical(self):
        assert not is_critical_issue(make_task(status="todo", priority="medium"), NOW)

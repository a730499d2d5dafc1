# tests/integration/test_api_analytics.py
"""
Integration tests for the /api/analytics routes.

The app runs against the seeded in-memory store through the container
override in conftest.py.
"""

import warnings

import pytest
from unittest.mock import patch

from minutes_analytics.core.container import container


# =============================================================================
# ROUTER STRUCTURE
# =============================================================================

class TestAnalyticsRouterStructure:
    """Tests for router mounting."""

    def test_combined_router_has_prefix(self):
        """Combined router should have /api/analytics prefix."""
        from minutes_analytics.domains.analytics.api import router

        assert router.prefix == "/api/analytics"

    def test_health(self, client, assert_response_success):
        data = assert_response_success(client.get("/health"))
        assert data["status"] == "ok"
        assert data["store_backend"] == "memory"


# =============================================================================
# REPORT ROUTES
# =============================================================================

class TestTaskRoutes:
    """Tests for task report endpoints."""

    def test_progress(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/tasks/progress"))
        assert data["distribution"]["total"] == 7
        assert [t["id"] for t in data["overdue"]["most_overdue_sample"]] == ["task-7", "task-4"]

    def test_progress_with_scope_and_window(self, client, assert_response_success):
        data = assert_response_success(client.get(
            "/api/analytics/tasks/progress",
            params={"city_id": "c-spring", "from": "2024-06-01", "to": "2024-06-10T23:59:59Z"},
        ))
        # task-1, task-3, task-4, task-6
        assert data["distribution"]["total"] == 4

    def test_completion_time(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/tasks/completion-time"))
        assert data["overall_average_hours"] == pytest.approx(20)
        assert data["by_priority"]["medium"] is None

    def test_weighted_closure_time(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/tasks/weighted-closure-time"))
        assert data["weighted_average_hours"] == pytest.approx(16.25)


class TestOrganizationRoutes:
    """Tests for team, department, city, goal and meeting endpoints."""

    def test_teams_needing_support(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/teams/needing-support"))
        assert [t["team_id"] for t in data] == ["t-roads", "t-green", "t-pipes"]

    def test_team_closure_times(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/teams/closure-times", params={"team_id": "t-pipes"}))
        assert len(data) == 1
        assert data[0]["average_close_hours"] == pytest.approx(30)

    def test_department_closure_times(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/departments/closure-times"))
        assert [d["department_name"] for d in data] == ["Public Works", "Parks"]

    def test_city_overview(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/cities/c-spring/overview"))
        assert data["summary"]["total_tasks"] == 6
        assert len(data["department_breakdown"]) == 2

    def test_city_overview_empty_city(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/cities/c-ogden/overview"))
        assert data["summary"]["total_tasks"] == 0
        assert data["sla_metrics"]["distribution_by_priority"]["urgent"] is None

    def test_city_goals(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/cities/c-shelby/goals"))
        assert [g["goal"]["id"] for g in data] == ["g-roads"]

    def test_goal_summary(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/goals/summary", params={"department_id": "d-works"}))
        assert data[0]["at_risk_tasks"] == 1

    def test_meeting_compliance(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/meetings/compliance", params={"team_id": "t-pipes"}))
        assert data["summary"]["total_meetings"] == 1


class TestSummaryRoutes:
    """Tests for the rpc-backed summary endpoints."""

    def test_tasks_by_city(self, client, org_store, assert_response_success):
        org_store.register_rpc("get_tasks_by_city", [{"city_id": "c-spring", "city_name": "Springfield", "total_tasks": 6}])
        data = assert_response_success(client.get("/api/analytics/summaries/tasks-by-city"))
        assert data[0]["total_tasks"] == 6

    def test_weighted_closure_empty(self, client, org_store, assert_response_success):
        org_store.register_rpc("get_weighted_avg_closure_time", [])
        assert assert_response_success(client.get("/api/analytics/summaries/weighted-closure")) is None

    def test_unregistered_rpc_is_bad_gateway(self, client):
        response = client.get("/api/analytics/summaries/closure-by-city")
        assert response.status_code == 502


# =============================================================================
# DASHBOARD
# =============================================================================

class TestDashboard:
    """Tests for the combined dashboard endpoint."""

    def test_dashboard_combines_reports(self, client, assert_response_success):
        data = assert_response_success(client.get("/api/analytics/dashboard"))

        assert data["task_progress"]["distribution"]["total"] == 7
        assert data["weighted_closure"]["weighted_average_hours"] == pytest.approx(16.25)
        assert data["teams_needing_support"][0]["team_id"] == "t-roads"
        assert len(data["department_closure"]) == 2
        assert len(data["goals"]) == 2
        assert data["meeting_compliance"]["summary"]["total_meetings"] == 3

    def test_dashboard_fails_when_one_report_fails(self, client):
        store = container.analytics_store()
        original_table = store.table

        def failing_table(name):
            if name == "meetings":
                raise RuntimeError("meetings table unavailable")
            return original_table(name)

        with patch.object(store, "table", side_effect=failing_table):
            response = client.get("/api/analytics/dashboard")

        assert response.status_code == 502
        assert response.json()["detail"] == "Analytics store unavailable"


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:
    """Tests for input validation."""

    def test_inverted_window(self, client):
        response = client.get("/api/analytics/tasks/progress", params={"from": "2024-07-01", "to": "2024-06-01"})
        assert response.status_code == 422

    def test_non_iso_date(self, client):
        response = client.get("/api/analytics/tasks/progress", params={"from": "last week"})
        assert response.status_code == 422

    def test_org_scope_with_filters(self, client):
        response = client.get("/api/analytics/goals/summary", params={"org_scope": "true", "city_id": "c-spring"})
        assert response.status_code == 422

    def test_validation_error_status_without_deprecation_warning(self):
        from fastapi import HTTPException
        from minutes_analytics.domains.analytics.api.deps import scope_params

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with pytest.raises(HTTPException) as exc_info:
                scope_params(org_scope=True, city_id="c-spring", department_id=None, team_id=None)

        assert exc_info.value.status_code == 422
        assert not [w for w in caught if issubclass(w.category, DeprecationWarning) and "422" in str(w.message)]

# tests/conftest.py
"""
Pytest configuration and fixtures for the analytics test suite.

Provides:
- In-memory analytics store, empty and seeded with the sample organization
- A fixed "now" so overdue and stale checks are deterministic
- FastAPI test client wired to the seeded store

Note: Tests never reach Supabase. The container is overridden with an
InMemoryAnalyticsStore for the duration of each test.
"""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment before imports
os.environ["MINUTES_ENV"] = "test"
os.environ["MINUTES_CONFIG_DIR"] = str(Path(__file__).resolve().parent.parent / "config")
os.environ["DATABASE_TYPE"] = "memory"
os.environ.pop("MINUTES_NEGATIVE_CLOSURE_POLICY", None)
os.environ.pop("MINUTES_STALE_DAYS", None)
os.environ.pop("MINUTES_OVERDUE_SAMPLE_SIZE", None)

from minutes_analytics.adapters.database.memory import InMemoryAnalyticsStore
from minutes_analytics.config import reload_config
from minutes_analytics.core.container import container
from minutes_analytics.main import app

from fixtures.data import NOW, make_org_tables


# ============== Store Fixtures ==============

@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time matching the sample organization."""
    return datetime.fromisoformat(NOW).astimezone(timezone.utc)


@pytest.fixture(scope="function")
def store() -> InMemoryAnalyticsStore:
    """Empty in-memory store."""
    return InMemoryAnalyticsStore()


@pytest.fixture(scope="function")
def org_store() -> InMemoryAnalyticsStore:
    """In-memory store seeded with the sample organization."""
    return InMemoryAnalyticsStore(make_org_tables())


@pytest.fixture(autouse=True)
def fresh_config() -> Generator[None, None, None]:
    """Re-read config after each test so env tweaks never leak."""
    yield
    reload_config()


# ============== FastAPI Client Fixtures ==============

@pytest.fixture(scope="function")
def client(org_store) -> Generator[TestClient, None, None]:
    """
    FastAPI test client backed by the seeded store.

    Routes use the real clock, so the sample data keeps its overdue and
    stale tasks whatever the current date.
    """
    container.override(org_store)
    with TestClient(app) as test_client:
        yield test_client
    container.reset()


# ============== Assertion Helpers ==============

@pytest.fixture
def assert_response_success():
    """Helper to assert successful API responses."""
    def _assert(response, status_code: int = 200):
        assert response.status_code == status_code, f"Expected {status_code}, got {response.status_code}: {response.text}"
        return response.json()
    return _assert

# src/minutes_analytics/core/container.py
"""
Dependency Injection Container

Central place that decides which store adapter backs the analytics engines.
Switching Supabase <-> in-memory is a configuration change, not a code change.

Usage:
    from minutes_analytics.core.container import container

    store = container.analytics_store()
"""

import logging
from typing import Optional

from ..config import get_config
from .ports.store import AnalyticsStore

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    The backend comes from ``store.backend`` in the configuration
    (``DATABASE_TYPE`` env var) unless configured explicitly.
    """

    def __init__(self, backend: Optional[str] = None):
        self._backend = backend
        self._store_instance: Optional[AnalyticsStore] = None

    @property
    def backend(self) -> str:
        return self._backend or get_config().store.backend

    # =========================================================================
    # STORE
    # =========================================================================

    def analytics_store(self) -> AnalyticsStore:
        """
        Get the analytics store instance.

        Returns SupabaseAnalyticsStore or InMemoryAnalyticsStore based on config.

        Raises:
            ValueError: If the configured backend is unknown.
        """
        if self._store_instance is None:
            store_config = get_config().store
            backend = self.backend
            if backend == "supabase":
                from ..adapters.database.supabase import SupabaseAnalyticsStore
                self._store_instance = SupabaseAnalyticsStore(
                    url=store_config.supabase_url or None,
                    key=store_config.supabase_key or None,
                )
            elif backend == "memory":
                from ..adapters.database.memory import InMemoryAnalyticsStore
                if store_config.seed_path:
                    self._store_instance = InMemoryAnalyticsStore.from_json(store_config.seed_path)
                else:
                    self._store_instance = InMemoryAnalyticsStore()
            else:
                raise ValueError(f"Unknown store backend: {backend}")
            logger.info(f"Analytics store ready: backend={backend}")
        return self._store_instance

    # =========================================================================
    # UTILITY
    # =========================================================================

    def override(self, store: AnalyticsStore) -> None:
        """Use ``store`` for every subsequent request (tests, scripts)."""
        self._store_instance = store
        logger.info(f"Container store overridden with {type(store).__name__}")

    def reset(self) -> None:
        """Reset cached instances (useful for testing)."""
        self._store_instance = None
        logger.info("Container reset")

    def configure(self, backend: Optional[str] = None) -> None:
        """
        Reconfigure the container at runtime.

        Args:
            backend: "supabase" or "memory"
        """
        self._backend = backend
        self._store_instance = None
        logger.info(f"Container reconfigured: backend={self.backend}")


# Global container instance
container = Container()


def get_analytics_store() -> AnalyticsStore:
    """Get the configured analytics store."""
    return container.analytics_store()

"""
Configuration loader for the minutes analytics service.
Loads configuration from YAML files and environment variables.
"""

from typing import Any, Dict, Literal, Optional
from pathlib import Path
import yaml
import os
from pydantic import BaseModel, Field
import logging

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Which store adapter backs the analytics engines."""

    backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str = ""
    supabase_key: str = ""

    # JSON fixture loaded into the in-memory store (local development)
    seed_path: Optional[str] = None


class AnalyticsSettings(BaseModel):
    """Tunables for the aggregation heuristics."""

    # "stuck in progress" threshold, measured from created_at
    stale_in_progress_days: int = Field(default=7, ge=0)

    # number of most-overdue tasks returned with task progress
    overdue_sample_size: int = Field(default=5, ge=0)

    # keep | exclude | clamp closure times where updated_at < created_at
    negative_closure_policy: Literal["keep", "exclude", "clamp"] = "keep"


class MinutesConfig(BaseModel):
    """Main service configuration."""

    # Environment
    environment: str = "development"
    debug: bool = True

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8001
    api_prefix: str = "/api"

    # Logging
    log_level: str = "INFO"

    store: StoreConfig = Field(default_factory=StoreConfig)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)

    model_config = {"extra": "allow"}


class ConfigLoader:
    """Load and manage service configuration."""

    def __init__(self, config_dir: str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        self.config: Optional[MinutesConfig] = None
        self.load()

    def load(self) -> MinutesConfig:
        """Load configuration from YAML and environment variables."""

        # Determine which config file to load
        env = os.getenv("MINUTES_ENV", "development")
        config_file = self.config_dir / f"{env}.yaml"

        # Load default config first
        merged = self._load_yaml(self.config_dir / "default.yaml")

        # Override with environment-specific config
        if config_file.exists():
            _deep_update(merged, self._load_yaml(config_file))
        else:
            logger.debug(f"Config file not found: {config_file}, using defaults")

        # Override with environment variables
        _deep_update(merged, self._load_from_env())
        merged.setdefault("environment", env)

        self.config = MinutesConfig(**merged)

        logger.info(
            f"Configuration loaded (environment: {self.config.environment}, "
            f"store: {self.config.store.backend})"
        )

        return self.config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML config file."""
        if not path.exists():
            return {}

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                return data or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load YAML config {path}: {e}")
            return {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if log_level := os.getenv("MINUTES_LOG_LEVEL"):
            config["log_level"] = log_level.upper()
        if api_port := os.getenv("MINUTES_API_PORT"):
            config["api_port"] = int(api_port)

        # Store configuration
        store: Dict[str, Any] = {}
        if backend := os.getenv("DATABASE_TYPE"):
            store["backend"] = backend.lower()
        if supabase_url := os.getenv("SUPABASE_URL"):
            store["supabase_url"] = supabase_url
        if supabase_key := os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY"):
            store["supabase_key"] = supabase_key
        if seed_path := os.getenv("MINUTES_SEED_PATH"):
            store["seed_path"] = seed_path
        if store:
            config["store"] = store

        # Analytics heuristics
        analytics: Dict[str, Any] = {}
        if stale_days := os.getenv("MINUTES_STALE_DAYS"):
            analytics["stale_in_progress_days"] = int(stale_days)
        if sample_size := os.getenv("MINUTES_OVERDUE_SAMPLE_SIZE"):
            analytics["overdue_sample_size"] = int(sample_size)
        if policy := os.getenv("MINUTES_NEGATIVE_CLOSURE_POLICY"):
            analytics["negative_closure_policy"] = policy.lower()
        if analytics:
            config["analytics"] = analytics

        return config

    def get(self) -> MinutesConfig:
        """Get current configuration."""
        if not self.config:
            self.load()
        return self.config

    def reload(self) -> MinutesConfig:
        """Reload configuration (useful for development and tests)."""
        logger.info("Reloading configuration...")
        return self.load()


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``overrides`` into ``base`` recursively, in place."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


# Global config instance
_global_config_loader: Optional[ConfigLoader] = None


def get_config() -> MinutesConfig:
    """Get the global service configuration."""
    global _global_config_loader
    if _global_config_loader is None:
        _global_config_loader = ConfigLoader(os.getenv("MINUTES_CONFIG_DIR", "config"))
    return _global_config_loader.get()


def initialize_config(config_dir: str = "config") -> MinutesConfig:
    """Initialize the global configuration loader."""
    global _global_config_loader
    _global_config_loader = ConfigLoader(config_dir)
    return _global_config_loader.get()


def reload_config() -> MinutesConfig:
    """Re-read YAML and environment into the global configuration."""
    if _global_config_loader is None:
        return get_config()
    return _global_config_loader.reload()

"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the tunables of the
dialogue pipeline, the route catalog and logging.

Configuration can be overridden via environment variables:
- RA_DIALOGUE_HISTORY_CAPACITY=50
- RA_DIALOGUE_SESSION_TTL_SECONDS=1800
- RA_CATALOG_DATA_DIR=/path/to/data
- RA_LOG_STRUCTURED=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DialogueConfig(BaseSettings):
    """Dialogue and session configuration.

    Environment variables prefixed with RA_DIALOGUE_.
    """

    model_config = SettingsConfigDict(env_prefix="RA_DIALOGUE_")

    history_capacity: int = Field(default=20, ge=1)
    max_sessions: Optional[int] = Field(default=10_000, ge=1)
    session_ttl_seconds: Optional[float] = Field(default=None, gt=0)


class CatalogConfig(BaseSettings):
    """Route catalog data configuration.

    Environment variables prefixed with RA_CATALOG_.
    """

    model_config = SettingsConfigDict(env_prefix="RA_CATALOG_")

    data_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parent / "data")
    routes_file: str = "routes.csv"
    schedules_file: str = "schedules.csv"

    @property
    def routes_path(self) -> Path:
        """Full path to routes CSV file."""
        return self.data_dir / self.routes_file

    @property
    def schedules_path(self) -> Path:
        """Full path to schedules CSV file."""
        return self.data_dir / self.schedules_file


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with RA_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="RA_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.dialogue.history_capacity)
        print(config.catalog.routes_path)

    Environment variables prefixed with RA_.
    """

    model_config = SettingsConfigDict(env_prefix="RA_")

    dialogue: DialogueConfig = Field(default_factory=DialogueConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def package_root(self) -> Path:
        """Return the package directory."""
        return Path(__file__).resolve().parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()

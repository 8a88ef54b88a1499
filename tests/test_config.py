"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from route_assistant.config import (
    AppConfig,
    CatalogConfig,
    DialogueConfig,
    get_config,
    reset_config,
)


def test_defaults():
    config = AppConfig()
    assert config.dialogue.history_capacity == 20
    assert config.dialogue.max_sessions == 10_000
    assert config.dialogue.session_ttl_seconds is None
    assert config.observability.level == "INFO"
    assert config.observability.structured is False


def test_packaged_catalog_paths_exist():
    catalog = CatalogConfig()
    assert catalog.routes_path.is_file()
    assert catalog.schedules_path.is_file()
    assert catalog.data_dir == AppConfig().package_root / "data"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RA_DIALOGUE_HISTORY_CAPACITY", "5")
    monkeypatch.setenv("RA_DIALOGUE_SESSION_TTL_SECONDS", "1800")
    monkeypatch.setenv("RA_CATALOG_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RA_LOG_STRUCTURED", "true")

    config = AppConfig()
    assert config.dialogue.history_capacity == 5
    assert config.dialogue.session_ttl_seconds == 1800
    assert config.catalog.routes_path == Path(tmp_path) / "routes.csv"
    assert config.observability.structured is True


def test_invalid_history_capacity(monkeypatch):
    monkeypatch.setenv("RA_DIALOGUE_HISTORY_CAPACITY", "0")
    with pytest.raises(ValidationError):
        DialogueConfig()


def test_get_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("RA_DIALOGUE_MAX_SESSIONS", "3")
    assert get_config().dialogue.max_sessions == 10_000

    reset_config()
    assert get_config().dialogue.max_sessions == 3

"""Tests for settings loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from feed_service.core.settings import (
    DatabaseSettings,
    LoggingSettings,
    PaginationSettings,
    clear_settings_cache,
    get_pagination_settings,
    get_settings,
)


def test_pagination_defaults() -> None:
    settings = PaginationSettings()

    assert settings.default_limit == 10
    assert settings.max_limit == 50


def test_pagination_default_cannot_exceed_max() -> None:
    with pytest.raises(ValidationError):
        PaginationSettings(default_limit=60, max_limit=50)


def test_pagination_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGINATION_MAX_LIMIT", "20")
    clear_settings_cache()

    try:
        assert get_pagination_settings().max_limit == 20
    finally:
        monkeypatch.delenv("PAGINATION_MAX_LIMIT")
        clear_settings_cache()


def test_settings_are_cached() -> None:
    clear_settings_cache()

    assert get_settings() is get_settings()


def test_memory_sqlite_uses_static_pool() -> None:
    from sqlalchemy.pool import StaticPool

    settings = DatabaseSettings(url="sqlite+aiosqlite:///:memory:")

    assert settings.is_sqlite
    assert settings.is_memory
    assert settings.engine_kwargs()["poolclass"] is StaticPool


def test_server_database_gets_pool_options() -> None:
    settings = DatabaseSettings(url="postgresql+psycopg://feed:secret@db/feed", pool_size=5)

    kwargs = settings.engine_kwargs()

    assert not settings.is_sqlite
    assert kwargs["pool_size"] == 5
    assert "poolclass" not in kwargs


def test_log_json_toggle(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_JSON", "false")

    assert LoggingSettings().json_logs is False
    assert LoggingSettings(json_logs=True).json_logs is True


def test_log_level_is_normalized() -> None:
    assert LoggingSettings(level="debug").level == "DEBUG"

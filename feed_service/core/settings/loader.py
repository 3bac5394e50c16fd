"""Cached settings loaders.

Each loader reads the environment once per process. Tests that change
environment variables call ``clear_settings_cache()`` afterwards.
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .database import DatabaseSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    return PaginationSettings()


def clear_settings_cache() -> None:
    """Forget every loaded settings object, including the aggregate."""
    from .unified import get_settings

    for cached in (
        get_app_settings,
        get_db_settings,
        get_logging_settings,
        get_pagination_settings,
        get_settings,
    ):
        cached.cache_clear()

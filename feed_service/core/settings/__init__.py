"""Modular Pydantic Settings v2 configuration.

Each domain has its own settings model and environment prefix:
    - APP_        application / HTTP server
    - DB_         database engine and pool
    - PAGINATION_ feed page sizes
    - LOG_        logging handlers and format

Import settings via the cached loaders:
    from feed_service.core.settings import get_pagination_settings

Or use unified settings for convenient access to all domains:
    from feed_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.pagination.max_limit)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings
from .unified import Settings, get_settings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "Settings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
    "get_settings",
]

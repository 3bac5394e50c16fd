"""All settings domains behind one object.

``create_app`` takes a ``Settings`` so tests can hand it a tailored one;
everything else goes through ``get_settings()``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings


class Settings(BaseModel):
    """Aggregate of the per-prefix settings models.

    Example:
        Settings(pagination=PaginationSettings(max_limit=20))
    """

    model_config = ConfigDict(frozen=True)

    app: AppSettings = Field(default_factory=get_app_settings)
    db: DatabaseSettings = Field(default_factory=get_db_settings)
    pagination: PaginationSettings = Field(default_factory=get_pagination_settings)
    logging: LoggingSettings = Field(default_factory=get_logging_settings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

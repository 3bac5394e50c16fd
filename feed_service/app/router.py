"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from feed_service.features.health.router import router as health_router
from feed_service.features.metrics.router import router as metrics_router
from feed_service.features.posts.router import router as posts_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from feed_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings) -> None:
    """Register all feature routers with the application.

    ``/health`` and ``/metrics`` sit at the root; feature routes live under
    ``app_settings.api_prefix``.
    """
    api_prefix = app_settings.api_prefix

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(posts_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})

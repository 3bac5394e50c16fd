"""HTTP middleware and its registration order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from feed_service.app.middleware.metrics import MetricsMiddleware
from feed_service.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from feed_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI, app_settings: AppSettings) -> None:
    """Register middleware.

    Starlette runs the last-added middleware first, so the request id is
    assigned before metrics are taken and before any handler logs.
    """
    if app_settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_methods=["GET", "POST", "DELETE"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    logger.debug("Middleware configured", extra={"cors_origins": app_settings.cors_origins})


__all__ = [
    "MetricsMiddleware",
    "RequestIDMiddleware",
    "configure_middleware",
]

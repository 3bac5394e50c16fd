"""Application lifespan: logging, then the database handle."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from feed_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Startup configures logging and initializes ``app.state.database``
    (connectivity check, table creation when enabled). Shutdown disposes
    of the engine and flushes the log queue.
    """
    settings = app.state.settings
    setup_logging(log_settings=settings.logging, force=True)
    logger.info(
        "Application starting",
        extra={
            "service": settings.app.service_name,
            "environment": settings.app.environment,
            "version": settings.app.version,
        },
    )

    database = app.state.database
    await database.init()

    try:
        yield
    finally:
        logger.info("Application shutting down")
        await database.teardown()

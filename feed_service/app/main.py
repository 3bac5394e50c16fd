"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from feed_service.app.exception_handlers import configure_exception_handlers
from feed_service.app.lifespan import lifespan
from feed_service.app.middleware import configure_middleware
from feed_service.app.router import setup_routers
from feed_service.core.settings import Settings, get_settings
from feed_service.infra.database import Database


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The database handle is attached to ``app.state.database`` here and
    initialized by the lifespan, so each app owns exactly one engine.

    Args:
        settings: Settings override; defaults to the cached environment settings.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    app_settings = settings.app

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.get_docs_url(),
        redoc_url=None,
        openapi_url=app_settings.get_openapi_url(),
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings.db)

    configure_exception_handlers(app)
    configure_middleware(app, app_settings)
    setup_routers(app, app_settings)

    return app

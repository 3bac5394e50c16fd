"""Server commands."""

import click
import uvicorn

from feed_service.cli.utils import info
from feed_service.core.settings import get_app_settings, get_logging_settings


@click.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--reload/--no-reload", default=False, help="Enable auto-reload on code changes")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the API server with uvicorn."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Serving {settings.title} on http://{host}:{port}")
    uvicorn.run(
        "feed_service.app.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        # Application logging is configured by the lifespan
        log_config=None,
        access_log=settings.debug,
        log_level=get_logging_settings().level.lower(),
    )

"""Database management commands.

Example:
    feed-service db init
    feed-service db drop --yes
"""

import click
from sqlalchemy.exc import SQLAlchemyError

from feed_service.cli.utils import coro, display_url, error, info, success, warning
from feed_service.core.settings import get_db_settings
from feed_service.infra.database import Database


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify connectivity and create all tables."""
    database = Database(get_db_settings())
    info(f"Connecting to: {display_url(database.settings.url)}")

    try:
        await database.init(create_tables=True)
    except SQLAlchemyError as exc:
        error(f"Database initialization failed: {exc}")
        raise SystemExit(1) from exc
    finally:
        await database.teardown()

    success("Database ready")


@db.command()
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@coro
async def drop(yes: bool) -> None:
    """Drop all tables (destroys data)."""
    if not yes:
        click.confirm("This drops every table. Continue?", abort=True)

    database = Database(get_db_settings())
    try:
        await database.init(create_tables=False)
        await database.drop_all()
    except SQLAlchemyError as exc:
        error(f"Dropping tables failed: {exc}")
        raise SystemExit(1) from exc
    finally:
        await database.teardown()

    warning("All tables dropped")

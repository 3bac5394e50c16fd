"""Database dependencies for FastAPI route handlers.

Route handlers never reach for a module-level engine. The ``Database``
handle is created by the application lifespan and stored on
``app.state.database``; these dependencies read it from the request.

Usage:
    @router.get("/posts")
    async def list_posts(session: Annotated[AsyncSession, Depends(get_db_session)]):
        ...

CLI commands and scripts own their own ``Database`` and call
``database.session()`` directly.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from feed_service.infra.database import Database


def get_database(request: Request) -> Database:
    """Return the database handle owned by the running application."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for a request-scoped database session.

    The session commits when the handler returns and rolls back if it raises.
    """
    async with get_database(request).session() as session:
        yield session

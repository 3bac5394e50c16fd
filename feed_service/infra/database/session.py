"""Database handle: async engine plus session factory.

The handle is created explicitly and owned by whoever starts the process
(the FastAPI lifespan or a CLI command); nothing here is created at import
time.

Example:
    database = Database(get_db_settings())
    await database.init()
    async with database.session() as session:
        ...
    await database.teardown()
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from feed_service.core.database import Base

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from feed_service.core.settings import DatabaseSettings

logger = logging.getLogger(__name__)


class DatabaseNotInitializedError(RuntimeError):
    """Raised when a session is requested before init() or after teardown()."""


class Database:
    """Explicit owner of the engine and session factory.

    Lifecycle: ``init()`` at process start, ``teardown()`` at shutdown.
    """

    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotInitializedError("Database.init() has not been called")
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def init(self, *, create_tables: bool | None = None) -> None:
        """Create the engine, verify connectivity and optionally create tables.

        Args:
            create_tables: Overrides ``settings.create_tables_on_startup``.

        Raises:
            SQLAlchemyError: If the database cannot be reached.
        """
        if self._engine is not None:
            return

        safe_url = make_url(self.settings.url).render_as_string(hide_password=True)
        logger.info("Initializing database connection", extra={"url": safe_url})

        engine = create_async_engine(self.settings.url, **self.settings.engine_kwargs())
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            should_create = (
                self.settings.create_tables_on_startup if create_tables is None else create_tables
            )
            if should_create:
                # Registers the mapped tables on Base.metadata
                import feed_service.features.posts.models  # noqa: F401

                async with engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})
        except Exception:
            logger.exception("Failed to connect to database", extra={"url": safe_url})
            await engine.dispose()
            raise

        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database connection established", extra={"url": safe_url})

    async def drop_all(self) -> None:
        """Drop every table registered on the metadata."""
        import feed_service.features.posts.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("Database tables dropped", extra={"tables": sorted(Base.metadata.tables)})

    async def teardown(self) -> None:
        """Dispose of the engine. Safe to call more than once."""
        if self._engine is None:
            return

        logger.info("Closing database connection")
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error.

        Example:
            async with database.session() as session:
                session.add(post)
        """
        if self._sessionmaker is None:
            raise DatabaseNotInitializedError("Database.init() has not been called")

        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


__all__ = [
    "Database",
    "DatabaseNotInitializedError",
]

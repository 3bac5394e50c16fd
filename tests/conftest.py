"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests off real infrastructure
    - Application Fixtures: FastAPI app and HTTP client
    - Database Fixtures: standalone in-memory database and sessions
    - Data Fixtures: helpers for inserting posts with controlled timestamps

Every test gets its own in-memory SQLite database; nothing is shared
between tests except the Prometheus registry.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES_ON_STARTUP", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_JSON", "false")

from feed_service.core.settings import clear_settings_cache, get_db_settings, get_settings  # noqa: E402
from feed_service.features.posts.models import Post  # noqa: E402
from feed_service.infra.database import Database  # noqa: E402

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession

    from feed_service.core.settings import Settings


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Fresh settings loaded from the test environment."""
    clear_settings_cache()
    return get_settings()


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI]:
    """Create a FastAPI application backed by its own in-memory database.

    The HTTP client does not run the lifespan, so the database handle is
    initialized here instead.
    """
    from feed_service.app.main import create_app

    application = create_app(settings)
    await application.state.database.init(create_tables=True)
    yield application
    await application.state.database.teardown()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the app.

    Unhandled exceptions are rendered by the app's 500 handler rather than
    re-raised into the test.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """Standalone database handle for repository and service tests."""
    clear_settings_cache()
    db = Database(get_db_settings())
    await db.init(create_tables=True)
    yield db
    await db.teardown()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Session that commits when the test finishes without error."""
    async with database.session() as session:
        yield session


# ============================================================================
# Data Fixtures
# ============================================================================

BASE_TIME = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)

type PostFactory = Callable[..., Awaitable[list[Post]]]


def _make_posts(
    count: int,
    *,
    author_id: str,
    start: datetime,
    step: timedelta,
) -> list[Post]:
    return [
        Post(
            content=f"post {index}",
            author_id=author_id,
            author_username=author_id,
            author_display_name=author_id.title(),
            author_avatar=f"https://avatars.test/{author_id}.png",
            created_at=start + step * index,
        )
        for index in range(count)
    ]


@pytest.fixture
def create_posts(app: FastAPI) -> PostFactory:
    """Insert posts directly into the app's database.

    Posts are created oldest first, ``step`` apart, starting at BASE_TIME.
    A zero step gives every post the same timestamp.

    Example:
        async def test_feed(client, create_posts):
            posts = await create_posts(25)
    """

    async def _create(
        count: int,
        *,
        author_id: str = "alice",
        start: datetime = BASE_TIME,
        step: timedelta = timedelta(seconds=1),
    ) -> list[Post]:
        posts = _make_posts(count, author_id=author_id, start=start, step=step)
        async with app.state.database.session() as session:
            session.add_all(posts)
        return posts

    return _create

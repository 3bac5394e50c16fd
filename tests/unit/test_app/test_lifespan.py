"""Tests for application startup and shutdown."""

from __future__ import annotations

import logging

from feed_service.app.main import create_app
from feed_service.core.settings import clear_settings_cache, get_settings


async def test_lifespan_initializes_and_tears_down_database() -> None:
    clear_settings_cache()
    app = create_app(get_settings())
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level

    try:
        async with app.router.lifespan_context(app):
            assert app.state.database.is_initialized
        assert not app.state.database.is_initialized
    finally:
        from feed_service.infra.logging import shutdown

        shutdown()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)


def test_routes_are_mounted() -> None:
    clear_settings_cache()
    app = create_app(get_settings())

    paths = set(app.openapi()["paths"])

    assert {"/health", "/api/posts", "/api/posts/{post_id}/like", "/api/posts/{post_id}"} <= paths

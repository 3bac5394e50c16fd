"""Helpers shared by CLI commands: async bridging and terminal output."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

import click
from sqlalchemy.engine import make_url


def coro[T](f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Run an async Click command body on a fresh event loop.

    Usage:
        @db.command()
        @coro
        async def init() -> None:
            await database.init(create_tables=True)
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def _emit(symbol: str, message: str, color: str, *, err: bool = False) -> None:
    click.secho(f"{symbol} {message}", fg=color, err=err)


def success(message: str) -> None:
    _emit("✓", message, "green")


def error(message: str) -> None:
    _emit("✗", message, "red", err=True)


def warning(message: str) -> None:
    _emit("⚠", message, "yellow")


def info(message: str) -> None:
    _emit("ℹ", message, "blue")


def display_url(url: str) -> str:
    """Database URL with any password masked, safe to print."""
    return make_url(url).render_as_string(hide_password=True)

"""Errors raised by repositories.

They describe data, not HTTP; the app's exception handlers map
``NotFoundError`` to a 404.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """A repository operation could not be completed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})


class NotFoundError(RepositoryError):
    """No ``model_name`` row matched ``identifier``."""

    def __init__(self, model_name: str, identifier: dict[str, Any]) -> None:
        self.model_name = model_name
        self.identifier = identifier
        keys = " ".join(f"{key}={value}" for key, value in identifier.items())
        super().__init__(f"{model_name} {keys} does not exist", details={"model": model_name, **identifier})


__all__ = [
    "NotFoundError",
    "RepositoryError",
]

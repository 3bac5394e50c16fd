"""Database infrastructure: the engine/session handle."""

from feed_service.infra.database.session import Database, DatabaseNotInitializedError

__all__ = [
    "Database",
    "DatabaseNotInitializedError",
]

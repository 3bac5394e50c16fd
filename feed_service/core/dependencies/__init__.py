"""FastAPI dependencies shared across features."""

from feed_service.core.dependencies.database import get_database, get_db_session

__all__ = [
    "get_database",
    "get_db_session",
]

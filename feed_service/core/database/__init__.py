"""Core database package: declarative base, mixins and repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming conventions
    - UUIDv7PKMixin: Time-sortable UUID v7 primary key
    - TimestampMixin: created_at, updated_at tracking

Repository:
    - BaseRepository[T]: Generic CRUD with explicit session passing
    - SessionSortedQuery[T]: Repository bound to a session for page queries

UUID Utilities:
    - generate_uuid7: Generate a process-monotonic UUID v7
    - parse_uuid: Parse UUID from canonical or hex form
"""

from feed_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    TimestampMixin,
    UUIDv7PKMixin,
    utcnow,
)
from feed_service.core.database.exceptions import NotFoundError, RepositoryError
from feed_service.core.database.repository import BaseRepository, SessionSortedQuery
from feed_service.core.database.utils import generate_uuid7, parse_uuid, uuid_to_timestamp

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "NotFoundError",
    "RepositoryError",
    "SessionSortedQuery",
    "TimestampMixin",
    "UUIDv7PKMixin",
    "generate_uuid7",
    "parse_uuid",
    "utcnow",
    "uuid_to_timestamp",
]

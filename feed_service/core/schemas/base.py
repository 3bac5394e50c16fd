"""Base schema classes for API responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC, reading naive datetimes as UTC.

    SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
    columns; everything this service stores is UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class CustomBase(BaseModel):
    """Base model with common configuration for all schemas.

    Fields are declared in snake_case and exchanged as camelCase on the wire.
    Either spelling is accepted on input.

    Example:
        class PostResponse(CustomBase):
            like_count: int       # serialized as "likeCount"
            created_at: UTCDateTime
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        # Silently drop unexpected data
        extra="ignore",
        str_strip_whitespace=True,
    )

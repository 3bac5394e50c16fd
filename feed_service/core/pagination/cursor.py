"""Cursor encoding and decoding for feed pagination.

A cursor names the last record a client has seen by its sort key
``(created_at, id)``. On the wire it is URL-safe base64 (unpadded) of a
compact JSON object:

    {"c": "2025-01-15T10:30:00.123456Z", "i": "0194a1f2-3c4d-7e5f-8a9b-0c1d2e3f4a5b"}

Both components are JSON strings, so no character inside either of them
can be confused with a delimiter.

Decoding never raises. It returns a tagged value, ``ValidCursor`` or
``InvalidCursor``; the reason carried by ``InvalidCursor`` is meant for
server logs and must never be echoed to clients.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError

from feed_service.core.schemas.base import ensure_utc

# Longest token a valid position can produce is well under this
MAX_CURSOR_LENGTH = 256


@dataclass(frozen=True, slots=True)
class PagePosition:
    """Sort key of the last record on a page.

    ``created_at`` is normalised to UTC on construction.
    """

    created_at: datetime
    id: UUID

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))


@dataclass(frozen=True, slots=True)
class ValidCursor:
    """A cursor that decoded to a usable position."""

    position: PagePosition


@dataclass(frozen=True, slots=True)
class InvalidCursor:
    """A cursor that was rejected. ``reason`` is for server-side logs only."""

    reason: str = field(default="malformed")


type DecodedCursor = ValidCursor | InvalidCursor


class _CursorPayload(BaseModel):
    """JSON shape inside the base64 envelope."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    c: datetime
    i: UUID


class CursorCodec:
    """Encode and decode feed pagination cursors.

    Usage:
        token = CursorCodec.encode(PagePosition(created_at=post.created_at, id=post.id))

        match CursorCodec.decode(token):
            case ValidCursor(position=position):
                ...
            case InvalidCursor(reason=reason):
                logger.info("Rejected cursor", extra={"reason": reason})
    """

    @staticmethod
    def encode(position: PagePosition) -> str:
        """Encode a page position to an opaque string.

        Args:
            position: Sort key of the last retained record

        Returns:
            URL-safe base64 string without padding
        """
        payload = _CursorPayload(c=position.created_at, i=position.id)
        raw = payload.model_dump_json().encode()
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    @staticmethod
    def decode(token: str) -> DecodedCursor:
        """Decode a cursor string.

        Rejects empty or oversized tokens, characters outside the URL-safe
        base64 alphabet, bytes that are not UTF-8 JSON, JSON that is not an
        object holding exactly ``c`` and ``i``, and ids that are not UUIDs.
        Timestamps must parse and, once shifted to UTC, still fit in a
        ``datetime``.

        Args:
            token: Cursor string as received from the client

        Returns:
            ValidCursor with the position, or InvalidCursor
        """
        if not token:
            return InvalidCursor("empty token")
        if len(token) > MAX_CURSOR_LENGTH:
            return InvalidCursor("token too long")

        try:
            raw = base64.b64decode(token + "=" * (-len(token) % 4), altchars=b"-_", validate=True)
        except ValueError:
            # binascii.Error and non-ASCII input both land here
            return InvalidCursor("not base64")

        try:
            payload = _CursorPayload.model_validate_json(raw, strict=True)
        except ValidationError as exc:
            fields = ",".join(str(err["loc"][0]) if err["loc"] else err["type"] for err in exc.errors())
            return InvalidCursor(f"invalid payload: {fields}")

        try:
            position = PagePosition(created_at=payload.c, id=payload.i)
        except (OverflowError, ValueError):
            # Offsets near datetime.min/max cannot be shifted to UTC
            return InvalidCursor("timestamp out of range")

        return ValidCursor(position)

    @staticmethod
    def position_of(row: Any) -> PagePosition:
        """Build the position of a row exposing ``created_at`` and ``id``."""
        return PagePosition(created_at=row.created_at, id=row.id)


__all__ = [
    "MAX_CURSOR_LENGTH",
    "CursorCodec",
    "DecodedCursor",
    "InvalidCursor",
    "PagePosition",
    "ValidCursor",
]

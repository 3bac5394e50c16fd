"""Database utility functions.

UUID v7 generation and parsing.

UUID v7 places a Unix millisecond timestamp in the leading 48 bits, so ids
created later compare greater both as UUIDs and as hex strings. Within one
process, ids minted in the same millisecond are kept strictly increasing by
a 12-bit counter in the ``rand_a`` field (RFC 9562, section 6.2, method 1).

Example:
    from feed_service.core.database.utils import generate_uuid7, parse_uuid

    id1 = generate_uuid7()
    id2 = generate_uuid7()
    assert id1 < id2

    uid = parse_uuid("0190a5b2-7c3e-7d41-9a1b-1c2d3e4f5a6b")
"""

from __future__ import annotations

import os
import threading
import time
import uuid
from datetime import UTC, datetime

_COUNTER_MAX = 0x0FFF

_lock = threading.Lock()
_last_ms = -1
_counter = 0


def generate_uuid7() -> uuid.UUID:
    """Generate a UUID v7 that is monotonic within the current process.

    Returns:
        UUID v7 instance
    """
    global _last_ms, _counter

    with _lock:
        timestamp_ms = time.time_ns() // 1_000_000
        if timestamp_ms > _last_ms:
            _last_ms = timestamp_ms
            # Random start leaves headroom for same-millisecond increments
            _counter = int.from_bytes(os.urandom(2), "big") & 0x07FF
        else:
            # Clock went backwards or same millisecond: keep the last timestamp
            _counter += 1
            if _counter > _COUNTER_MAX:
                _last_ms += 1
                _counter = 0
            timestamp_ms = _last_ms
        counter = _counter

    random_bytes = os.urandom(8)

    # Layout (RFC 9562):
    # - Bits 0-47: Unix timestamp in milliseconds (big-endian)
    # - Bits 48-51: Version (7)
    # - Bits 52-63: Counter (rand_a)
    # - Bits 64-65: Variant (10)
    # - Bits 66-127: Random
    uuid_bytes = bytearray(16)
    uuid_bytes[0:6] = timestamp_ms.to_bytes(6, byteorder="big")
    uuid_bytes[6] = 0x70 | (counter >> 8)
    uuid_bytes[7] = counter & 0xFF
    uuid_bytes[8] = (random_bytes[0] & 0x3F) | 0x80
    uuid_bytes[9:16] = random_bytes[1:8]

    return uuid.UUID(bytes=bytes(uuid_bytes))


def parse_uuid(value: str | uuid.UUID) -> uuid.UUID:
    """Parse a UUID from its canonical or hyphen-less hex form.

    Raises:
        ValueError: If value cannot be parsed as UUID

    Example:
        >>> parse_uuid("550e8400e29b41d4a716446655440000")
        UUID('550e8400-e29b-41d4-a716-446655440000')
    """
    if isinstance(value, uuid.UUID):
        return value

    value = value.strip()
    if len(value) not in (32, 36):
        raise ValueError(f"Cannot parse UUID from: {value!r}")
    return uuid.UUID(value)


def uuid_to_timestamp(uid: uuid.UUID) -> datetime | None:
    """Extract the creation time from a UUID v7, or None for other versions."""
    if uid.version != 7:
        return None

    timestamp_ms = int.from_bytes(uid.bytes[:6], byteorder="big")
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


__all__ = [
    "generate_uuid7",
    "parse_uuid",
    "uuid_to_timestamp",
]

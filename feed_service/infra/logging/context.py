"""Context management for structured logging.

Request-scoped fields (request_id, path, method) are stored in a ContextVar
and copied onto every LogRecord by ContextInjectingFilter, so they appear in
JSON output without being passed to each logging call. Each asyncio task
sees its own copy of the context.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        ```python
        set_log_context(request_id="abc-123", path="/api/posts")
        logger.info("Fetching page")  # Record carries request_id and path
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current task."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that copies the contextvar fields onto each LogRecord.

    Attached to the root logger through dictConfig:

        "filters": {
            "context": {"()": "feed_service.infra.logging.context.ContextInjectingFilter"}
        }
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            # Explicit extra= values win over ambient context
            if not hasattr(record, key):
                setattr(record, key, value)
        return True

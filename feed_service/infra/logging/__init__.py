"""Logging infrastructure.

Structured JSONL logging with automatic context injection, a non-blocking
QueueHandler/QueueListener pipeline and lazy evaluation for debug output.

Basic usage:
    import logging

    from feed_service.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Fetching page")  # Includes request_id
    lazy_logger.debug(lambda: f"rows={expensive_dump()}")  # Only runs if DEBUG enabled
"""

from feed_service.infra.logging.config import configure_logging, setup_logging, shutdown
from feed_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from feed_service.infra.logging.formatters import JSONFormatter
from feed_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]

"""Prometheus metrics registry and collectors."""

from feed_service.infra.metrics.prometheus import (
    REGISTRY,
    feed_invalid_cursor_total,
    feed_page_query_duration_seconds,
    feed_pages_served_total,
    http_request_duration_seconds,
    http_requests_total,
)

__all__ = [
    "REGISTRY",
    "feed_invalid_cursor_total",
    "feed_page_query_duration_seconds",
    "feed_pages_served_total",
    "http_request_duration_seconds",
    "http_requests_total",
]

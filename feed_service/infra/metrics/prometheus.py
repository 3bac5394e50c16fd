"""Prometheus metrics for monitoring."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Custom registry so tests and multiple app instances never collide with
# the process-wide default collectors
REGISTRY = CollectorRegistry()

# Covers response times from 1ms to 10s
DEFAULT_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# Feed pagination metrics
feed_pages_served_total = Counter(
    "feed_pages_served_total",
    "Feed pages resolved, labelled by whether a continuation exists",
    ["has_more"],
    registry=REGISTRY,
)

feed_invalid_cursor_total = Counter(
    "feed_invalid_cursor_total",
    "Feed requests rejected because the cursor could not be decoded",
    registry=REGISTRY,
)

feed_page_query_duration_seconds = Histogram(
    "feed_page_query_duration_seconds",
    "Duration of the single sorted query issued per feed page",
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

"""Prometheus metrics endpoint.

Endpoints:
    GET /metrics - Prometheus scrape endpoint (text exposition format)

Metrics Exposed:
    - http_requests_total / http_request_duration_seconds
    - feed_pages_served_total{has_more}
    - feed_invalid_cursor_total
    - feed_page_query_duration_seconds
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from feed_service.infra.metrics import REGISTRY

router = APIRouter(tags=["observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    response_class=Response,
    include_in_schema=False,
)
async def metrics() -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)

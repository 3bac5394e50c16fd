"""Metrics middleware for HTTP request instrumentation."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from starlette.middleware.base import BaseHTTPMiddleware

from feed_service.infra.metrics import http_request_duration_seconds, http_requests_total

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import Request, Response
    from starlette.types import Scope


def route_template(scope: Scope) -> str:
    """Full route template of the matched route, e.g. ``/api/posts/{post_id}``.

    Depending on the FastAPI version, ``route.path`` is either the full
    template or the template relative to the router's mount prefix. The
    prefix is recovered by stripping the rendered route from the request
    path. Returns ``unmatched`` when no route matched.
    """
    route: Any = scope.get("route")
    template = getattr(route, "path", None)
    if template is None:
        return "unmatched"

    path_format = getattr(route, "path_format", template)
    try:
        rendered = path_format.format(**scope.get("path_params", {}))
    except (KeyError, IndexError, ValueError):
        return template

    path: str = scope.get("path", "")
    if not path.endswith(rendered):
        return template
    return path[: len(path) - len(rendered)] + template


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count requests and observe their latency.

    The endpoint label is the route template (``/api/posts/{post_id}``),
    never the raw path, to keep label cardinality bounded. Requests that
    match no route are labelled ``unmatched``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        method = request.method
        start_time = time.perf_counter()
        status_code = 500  # Reported if the handler raises

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            endpoint = route_template(request.scope)
            http_requests_total.labels(method=method, endpoint=endpoint, status=str(status_code)).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                time.perf_counter() - start_time
            )

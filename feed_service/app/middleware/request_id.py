"""Request ID middleware for per-request tracking.

Takes the id from ``X-Request-ID`` when the client sends one, otherwise
generates a UUID. The id is stored on ``request.state.request_id``, added to
the logging context for the duration of the request and returned in the
``X-Request-ID`` response header.
"""

from __future__ import annotations

from feed_service.app.middleware.base import HeaderContextMiddleware, generate_uuid


class RequestIDMiddleware(HeaderContextMiddleware):
    """Add a unique request ID to every HTTP request.

    Usage:
        app.add_middleware(RequestIDMiddleware)

        @app.get("/")
        async def root(request: Request):
            return {"request_id": request.state.request_id}
    """

    header_name = "x-request-id"
    state_key = "request_id"
    log_context_key = "request_id"
    should_clear_context_on_finish = True

    def generate_value(self) -> str:
        return generate_uuid()

"""Base middleware class for header-based context propagation.

The pattern, as pure ASGI:
1. Read a value from a request header, or generate one
2. Store it in ``scope["state"]`` (visible as ``request.state``)
3. Add it to the logging context
4. Echo it in the response headers
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from feed_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Longest header value accepted before a fresh one is generated
MAX_HEADER_VALUE_LENGTH = 128


class HeaderContextMiddleware(ABC):
    """Propagate one request header into request state, log context and the response.

    A subclass names the header, the state and log-context keys, and how to
    mint a value when the client sent none (see ``RequestIDMiddleware``).
    Values longer than MAX_HEADER_VALUE_LENGTH are replaced, never trusted.
    """

    header_name: str
    state_key: str
    log_context_key: str

    should_clear_context_on_finish: bool = False

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    @abstractmethod
    def generate_value(self) -> str:
        """Generate a new value when the header is absent or unusable."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        value = self._extract_or_generate(scope)
        scope.setdefault("state", {})[self.state_key] = value
        set_log_context(**{self.log_context_key: value})

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, value)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            if self.should_clear_context_on_finish:
                clear_log_context()

    def _extract_or_generate(self, scope: Scope) -> str:
        if existing := scope.get("state", {}).get(self.state_key):
            return existing

        for name, raw in scope.get("headers", []):
            if name == self.header_name.encode("latin-1"):
                value = raw.decode("latin-1").strip()
                if value and len(value) <= MAX_HEADER_VALUE_LENGTH:
                    return value
                break

        return self.generate_value()


def generate_uuid() -> str:
    """Generate a new UUID v4 string."""
    return str(uuid.uuid4())

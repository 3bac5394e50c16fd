"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class. Handlers render
    them as ``{"error": title, "message": detail}``.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message, sent as ``message``.
        type: Error type identifier used in logs and metrics.
        title: Short, human-readable summary, sent as ``error``.
        extra: Additional context merged into the response body.

    Example:
        raise AppException(
            status_code=404,
            detail="Post not found",
            type="post-not-found",
            title="Not found",
            extra={"post_id": "0190..."},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad request",
            403: "Forbidden",
            404: "Not found",
            500: "Internal server error",
            503: "Service unavailable",
        }
        return titles.get(status_code, "Error")


class NotFoundException(AppException):
    """Exception raised when a resource is absent or soft-deleted.

    Example:
        raise NotFoundException(detail="Post not found", extra={"post_id": post_id})
    """

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not found",
            extra=extra,
        )


class ForbiddenException(AppException):
    """Exception raised when the caller does not own the resource."""

    def __init__(
        self,
        detail: str = "Not authorized to perform this action",
        type: str = "forbidden",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=403,
            detail=detail,
            type=type,
            title="Forbidden",
            extra=extra,
        )


class ValidationException(AppException):
    """Exception raised for request payloads that fail business validation.

    Example:
        raise ValidationException(
            detail="Missing required fields",
            extra={"required": ["content", "userId"]},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        title: str = "Invalid request",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title=title,
            extra=extra,
        )


class InvalidCursorException(ValidationException):
    """Exception raised when a pagination cursor cannot be decoded.

    Every decode failure produces the same status, title and message so
    that callers cannot tell which check rejected the token. The precise
    reason only ever reaches server logs.
    """

    def __init__(self) -> None:
        super().__init__(
            detail="Malformed cursor",
            type="invalid-cursor",
            title="Invalid cursor",
        )


class PageQueryException(AppException):
    """Exception raised when the backing store fails while fetching a page."""

    def __init__(self, detail: str = "Failed to fetch posts") -> None:
        super().__init__(
            status_code=500,
            detail=detail,
            type="page-query-failed",
            title="Internal server error",
        )

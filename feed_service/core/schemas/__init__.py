"""Shared API schema building blocks."""

from feed_service.core.schemas.base import CustomBase, UTCDateTime, ensure_utc
from feed_service.core.schemas.error import ErrorResponse, ValidationErrorResponse

__all__ = [
    "CustomBase",
    "ErrorResponse",
    "UTCDateTime",
    "ValidationErrorResponse",
    "ensure_utc",
]

"""Error response schemas used in OpenAPI documentation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response.

    Example:
        {"error": "Invalid cursor", "message": "Malformed cursor", "request_id": "..."}
    """

    error: str = Field(description="Short summary of the problem")
    message: str = Field(description="Human-readable explanation")
    request_id: str | None = Field(default=None, description="Correlation id of the request")


class ValidationErrorResponse(ErrorResponse):
    """Error response for payloads that fail validation."""

    errors: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Field-level validation failures",
    )

"""Pagination settings for the feed listing.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=20, PAGINATION_MAX_LIMIT=50
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size applied when the caller sends no usable limit.
        max_limit: Hard upper bound on page size.

    Example:
        settings = PaginationSettings()
        limit = clamp_limit(raw, default=settings.default_limit, maximum=settings.max_limit)
    """

    default_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Maximum allowed page size (hard limit)",
    )

    @model_validator(mode="after")
    def validate_default_within_max(self) -> PaginationSettings:
        """Ensure the default page size never exceeds the maximum."""
        if self.default_limit > self.max_limit:
            msg = "default_limit cannot be greater than max_limit"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

"""HTTP application settings (``APP_`` prefix).

Example:
    APP_PORT=8080 APP_API_PREFIX=/v1 APP_CORS_ORIGINS='["https://feed.example"]'
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """Identity of the service and how FastAPI exposes it."""

    service_name: str = Field(
        default="feed-service",
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Kebab-case name used in logs",
    )
    title: str = Field(default="Feed Service API", min_length=1)
    description: str = Field(
        default="Short text posts with likes, soft deletion and a cursor-paginated feed",
    )
    version: str = Field(default="1.0.0", pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$")
    environment: Environment = "development"

    # Post routes are mounted here; /health and /metrics stay at the root
    api_prefix: str = Field(default="/api", pattern=r"^/.*$")

    debug: bool = False
    docs_url: str | None = "/docs"
    openapi_url: str | None = "/openapi.json"
    disable_docs: bool = Field(default=False, description="Hide /docs and the OpenAPI schema")

    host: str = Field(default="0.0.0.0", min_length=1)
    port: int = Field(default=3000, ge=1, le=65535)

    cors_origins: list[str] = Field(
        default_factory=list,
        description="Browser origins allowed to call the API; empty disables CORS",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def _no_debug_in_production(self) -> AppSettings:
        if self.environment == "production" and self.debug:
            msg = "APP_DEBUG must be false when APP_ENVIRONMENT=production"
            raise ValueError(msg)
        return self

    def get_docs_url(self) -> str | None:
        return None if self.disable_docs else self.docs_url

    def get_openapi_url(self) -> str | None:
        return None if self.disable_docs else self.openapi_url

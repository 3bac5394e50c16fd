"""Logging settings (``LOG_`` prefix).

Example:
    LOG_LEVEL=DEBUG LOG_JSON=false feed-service serve
    LOG_FILE_PATH=logs/feed.jsonl  # also write rotated JSON Lines to disk
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """How and where the service writes its logs.

    Console output is on by default; file output only happens when
    ``file_path`` is set.
    """

    service_name: str = Field(default="feed-service", description="Static `service` field of every record")
    level: LogLevel = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(
        default=True,
        validation_alias=AliasChoices("log_json", "json_logs"),
        description="One JSON object per line instead of plain text",
    )

    console_enabled: bool = Field(default=True, description="Write records to stderr")
    console_level: LogLevel | None = Field(default=None, description="Defaults to `level`")

    file_path: Path | None = Field(default=None, description="Rotating log file; unset disables it")
    file_level: LogLevel | None = Field(default=None, description="Defaults to `level`")
    file_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Size that triggers rotation")
    file_backup_count: int = Field(default=5, ge=0, le=100, description="Rotated files kept")

    include_context: bool = Field(default=True, description="Copy request_id and friends onto records")
    capture_warnings: bool = Field(default=True, description="Route `warnings` through logging")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )

    @field_validator("level", "console_level", "file_level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``configure_logging``."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "console_enabled": self.console_enabled,
            "console_level": self.console_level or self.level,
            "file_path": self.file_path,
            "file_level": self.file_level or self.level,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
            "include_context": self.include_context,
            "capture_warnings": self.capture_warnings,
        }

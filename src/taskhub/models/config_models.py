"""Application configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from taskhub.models.paging import MAX_PAGE_SIZE


class AppConfig(BaseModel):
    """Main application configuration, persisted as config.json."""

    db_path: str | None = Field(
        default=None, description="SQLite database path (None = user data dir)"
    )
    default_page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)
    output_format: Literal["table", "json", "yaml"] = Field(default="table")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

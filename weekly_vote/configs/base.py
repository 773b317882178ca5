"""
Shared settings for the weekly vote service.

Every settings class reads the same `.env` file; this base carries the
fields the process itself needs before any component starts: which
deployment it is, how loud logging is, and the title the HTTP surface
reports.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-wide settings shared by the lifecycle service and its API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment the scheduler and API run in",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for lifecycle transitions and requests",
    )
    app_name: str = Field(
        default="Team Weekly Vote API",
        description="Title reported by the HTTP trigger surface",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the log level name to upper case."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

"""
Vote session lifecycle settings.

Lock naming and timeout budget for the weekly session entrypoints.

Dependencies: pydantic, pydantic_settings
System role: Lifecycle manager configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from weekly_vote.configs.base import BaseSettings


class LifecycleSettings(BaseSettings):
    """Weekly vote session lifecycle configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VOTE_SESSION_",
        case_sensitive=False,
        extra="ignore",
    )

    lock_name: str = Field(
        default="vote-session-lifecycle",
        description="Advisory lock key serialising lifecycle transactions",
    )
    operation_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for one lifecycle operation, including lock wait",
    )
    include_votes_default: bool = Field(
        default=True,
        description="Eager-load votes when the active session is requested without a flag",
    )

"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from weekly_vote.configs.base import BaseSettings
from weekly_vote.configs.database import DatabaseSettings
from weekly_vote.configs.lifecycle import LifecycleSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    lifecycle: LifecycleSettings = LifecycleSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from weekly_vote.configs import get_settings
        settings = get_settings()
    """
    return Settings()

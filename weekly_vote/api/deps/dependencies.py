"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: weekly_vote.configs, weekly_vote.application, weekly_vote.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from weekly_vote.configs import Settings, get_settings
from weekly_vote.boundary.db import SqlAlchemySessionRepository, get_async_db
from weekly_vote.application.services import SessionLifecycleManager


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_repository(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> SqlAlchemySessionRepository:
    """
    Get vote session repository bound to the request's database session.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        SqlAlchemySessionRepository: Repository guarded by the configured lock name
    """
    return SqlAlchemySessionRepository(db=db, lock_name=settings.lifecycle.lock_name)


def get_lifecycle_manager(
    repository: SqlAlchemySessionRepository = Depends(get_session_repository),
) -> SessionLifecycleManager:
    """
    Get vote session lifecycle manager.

    Args:
        repository: Vote session repository (injected via Depends)

    Returns:
        SessionLifecycleManager: Lifecycle manager instance
    """
    return SessionLifecycleManager(repository=repository)

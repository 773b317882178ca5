"""
Database table creation script.

Creates the vote session tables defined in ORM models using SQLAlchemy
metadata. Existing tables are left untouched.

Dependencies: sqlalchemy, tenacity, weekly_vote.configs
System role: Database schema initialization

Usage:
    python -m weekly_vote.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from weekly_vote.boundary.db.base import Base
from weekly_vote.boundary.db.connection import get_async_engine
from weekly_vote.observability.logger import configure_logging

# Import all models to register them with Base.metadata
from weekly_vote.boundary.db.models.user_model import UserModel  # noqa: F401
from weekly_vote.boundary.db.models.vote_session_model import VoteSessionModel  # noqa: F401
from weekly_vote.boundary.db.models.vote_model import VoteModel  # noqa: F401

logger = logging.getLogger(__name__)


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(5),
    wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
    reraise=True,
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__}:create_all_tables - Retry {retry_state.attempt_number}/5 after connection failure"
    ),
)
async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: issues CREATE TABLE only for tables that do not exist.
    Connection failures are retried while the database starts up.

    Args:
        engine: Engine to use (defaults to get_async_engine())

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        f"{__name__}:create_all_tables - Tables ready",
        extra={"tables": sorted(Base.metadata.tables)},
    )


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_all_tables())

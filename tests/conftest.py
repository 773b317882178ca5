"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, vote session row factory, fixed KST clocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import date, datetime

import pytest

from weekly_vote.core.time_calculator import KST


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from weekly_vote.boundary.db.base import Base
    import weekly_vote.boundary.db.models  # noqa: F401  registers tables

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def monday_morning() -> datetime:
    """Monday 2025-11-03 01:00 KST."""
    return datetime(2025, 11, 3, 1, 0, tzinfo=KST)


@pytest.fixture
def current_week_monday() -> date:
    """Monday of the week containing monday_morning."""
    return date(2025, 11, 3)


@pytest.fixture
def next_week_monday() -> date:
    """Monday of the week after monday_morning."""
    return date(2025, 11, 10)

"""
Test suite for SqlAlchemySessionRepository.

Tests unit-of-work commit and rollback, error translation to
PersistenceError, and the lifecycle manager running end to end against an
in-memory SQLite database.

System role: Verification of the persistence adapter
"""

import asyncio
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from weekly_vote.application.services.session_lifecycle import SessionLifecycleManager
from weekly_vote.boundary.db.locks import acquire_xact_lock, lock_key
from weekly_vote.boundary.db.repository import SqlAlchemySessionRepository
from weekly_vote.core.exceptions import (
    NoActiveSessionError,
    PersistenceError,
    SessionNotFoundError,
)
from weekly_vote.core.time_calculator import KST, to_kst


@pytest.fixture
def repository(test_async_db: AsyncSession) -> SqlAlchemySessionRepository:
    """Provide repository bound to the in-memory database."""
    return SqlAlchemySessionRepository(db=test_async_db)


async def insert(
    repository: SqlAlchemySessionRepository,
    monday: date,
    is_active: bool = True,
    is_completed: bool = False,
    end_time: datetime | None = None,
):
    return await repository.insert_session(
        week_start_date=monday,
        start_time=datetime(monday.year, monday.month, monday.day, 0, 1, tzinfo=KST),
        end_time=end_time,
        is_active=is_active,
        is_completed=is_completed,
    )


class TestLocks:
    """Test suite for advisory lock helpers."""

    def test_lock_key_should_be_stable_signed_bigint(self) -> None:
        key = lock_key("vote-session-lifecycle")

        assert key == lock_key("vote-session-lifecycle")
        assert key != lock_key("other-lock")
        assert -(2**63) <= key < 2**63

    @pytest.mark.asyncio
    async def test_acquire_should_skip_on_sqlite(self, test_async_db: AsyncSession) -> None:
        assert await acquire_xact_lock(test_async_db, "vote-session-lifecycle") is False

    @pytest.mark.asyncio
    async def test_acquire_should_lock_on_postgresql(self) -> None:
        """Test pg_advisory_xact_lock is issued with the derived key."""
        # Arrange
        db = AsyncMock(spec=AsyncSession)
        bind = MagicMock()
        bind.dialect.name = "postgresql"
        db.get_bind = MagicMock(return_value=bind)

        # Act
        result = await acquire_xact_lock(db, "vote-session-lifecycle")

        # Assert
        assert result is True
        statement, params = db.execute.call_args.args
        assert "pg_advisory_xact_lock" in str(statement)
        assert params == {"key": lock_key("vote-session-lifecycle")}


class TestTransaction:
    """Test suite for SqlAlchemySessionRepository.transaction()."""

    @pytest.mark.asyncio
    async def test_transaction_should_commit_writes(
        self, repository: SqlAlchemySessionRepository
    ) -> None:
        async with repository.transaction():
            await insert(repository, date(2025, 11, 10))

        history = await repository.list_sessions()
        assert len(history) == 1

    @pytest.mark.asyncio
    async def test_transaction_should_roll_back_on_error(
        self, repository: SqlAlchemySessionRepository
    ) -> None:
        with pytest.raises(RuntimeError):
            async with repository.transaction():
                await insert(repository, date(2025, 11, 10))
                raise RuntimeError("abort")

        assert await repository.list_sessions() == []

    @pytest.mark.asyncio
    async def test_transaction_should_roll_back_on_cancellation(
        self, repository: SqlAlchemySessionRepository
    ) -> None:
        with pytest.raises(asyncio.CancelledError):
            async with repository.transaction():
                await insert(repository, date(2025, 11, 10))
                raise asyncio.CancelledError()

        assert await repository.list_sessions() == []


class TestErrorTranslation:
    """Test suite for SQLAlchemy error wrapping."""

    @pytest.fixture
    def failing_db(self) -> AsyncSession:
        """Provide mock async database session whose queries fail."""
        db = AsyncMock(spec=AsyncSession)
        db.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )
        db.get = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )
        return db

    @pytest.mark.asyncio
    async def test_find_active_sessions_should_raise_persistence_error(
        self, failing_db: AsyncSession
    ) -> None:
        repository = SqlAlchemySessionRepository(db=failing_db)

        with pytest.raises(PersistenceError) as exc_info:
            await repository.find_active_sessions()

        assert exc_info.value.details["operation"] == "find_active_sessions"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_update_session_state_should_carry_session_id(
        self, failing_db: AsyncSession
    ) -> None:
        repository = SqlAlchemySessionRepository(db=failing_db)

        with pytest.raises(PersistenceError) as exc_info:
            await repository.update_session_state(42, is_active=False, is_completed=True)

        assert exc_info.value.details == {
            "operation": "update_session_state",
            "session_id": 42,
        }

    @pytest.mark.asyncio
    async def test_update_session_state_should_raise_not_found(
        self, repository: SqlAlchemySessionRepository
    ) -> None:
        with pytest.raises(SessionNotFoundError):
            await repository.update_session_state(404, is_active=False, is_completed=True)

    @pytest.mark.asyncio
    async def test_update_disabled_days_should_raise_not_found(
        self, repository: SqlAlchemySessionRepository
    ) -> None:
        with pytest.raises(SessionNotFoundError):
            await repository.update_disabled_days(404, ["MON"])


class TestLifecycleAgainstDatabase:
    """End-to-end lifecycle runs through the SQLAlchemy repository."""

    @pytest.mark.asyncio
    async def test_create_twice_should_keep_single_row(
        self, repository: SqlAlchemySessionRepository, monday_morning: datetime
    ) -> None:
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        first = await manager.create_next_week_session()
        second = await manager.create_next_week_session()

        assert first.id == second.id
        assert len(await repository.list_sessions()) == 1
        assert first.week_start_date == date(2025, 11, 10)

    @pytest.mark.asyncio
    async def test_create_should_reactivate_reusable_row(
        self,
        repository: SqlAlchemySessionRepository,
        monday_morning: datetime,
        next_week_monday: date,
    ) -> None:
        # Arrange
        reusable = await insert(repository, next_week_monday, is_active=False)
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        # Act
        session = await manager.create_next_week_session()

        # Assert
        assert session.id == reusable.id
        assert session.is_active is True
        assert to_kst(session.start_time) == datetime(2025, 11, 3, 0, 1, tzinfo=KST)
        assert to_kst(session.end_time) == datetime(2025, 11, 14, 23, 59, 59, 999000, tzinfo=KST)

    @pytest.mark.asyncio
    async def test_get_active_session_should_archive_stored_expired_session(
        self, repository: SqlAlchemySessionRepository, monday_morning: datetime
    ) -> None:
        """Test expiry uses the stored end_time read back from SQLite."""
        # Arrange
        stale = await insert(
            repository,
            date(2025, 10, 20),
            end_time=datetime(2025, 10, 24, 23, 59, 59, 999000, tzinfo=KST),
        )
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        # Act
        result = await manager.get_active_session()

        # Assert
        assert result is None
        history = await repository.list_sessions()
        assert history[0].id == stale.id
        assert history[0].is_completed is True

    @pytest.mark.asyncio
    async def test_validate_should_leave_single_active_row(
        self,
        repository: SqlAlchemySessionRepository,
        monday_morning: datetime,
        current_week_monday: date,
    ) -> None:
        older = await insert(repository, current_week_monday)
        newer = await insert(repository, current_week_monday)
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        await manager.validate_and_fix_session_state()

        active = await repository.find_active_sessions()
        assert [s.id for s in active] == [newer.id]
        assert older.id != newer.id

    @pytest.mark.asyncio
    async def test_update_disabled_days_should_persist_codes(
        self,
        repository: SqlAlchemySessionRepository,
        monday_morning: datetime,
        current_week_monday: date,
    ) -> None:
        await insert(repository, current_week_monday)
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        await manager.update_disabled_days(["11/6(목)"])

        session = await repository.find_current_open_session()
        assert session.disabled_days == ["THU"]

    @pytest.mark.asyncio
    async def test_update_disabled_days_should_reject_stored_expired_session(
        self, repository: SqlAlchemySessionRepository, monday_morning: datetime
    ) -> None:
        """Test a still-flagged session that ended 2025-10-24 is not editable."""
        # Arrange
        stale = await insert(
            repository,
            date(2025, 10, 20),
            end_time=datetime(2025, 10, 24, 23, 59, 59, 999000, tzinfo=KST),
        )
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        # Act
        with pytest.raises(NoActiveSessionError):
            await manager.update_disabled_days(["MON"])

        # Assert
        history = await repository.list_sessions()
        assert history[0].id == stale.id
        assert history[0].disabled_days == []

    @pytest.mark.asyncio
    async def test_complete_session_should_archive_and_not_be_reused(
        self,
        repository: SqlAlchemySessionRepository,
        monday_morning: datetime,
    ) -> None:
        # Arrange
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)
        opened = await manager.create_next_week_session()

        # Act
        closed = await manager.complete_session(opened.id)
        reopened = await manager.create_next_week_session()

        # Assert
        assert closed.is_active is False
        assert closed.is_completed is True
        assert to_kst(closed.end_time) == monday_morning
        assert reopened.id != opened.id
        assert reopened.is_active is True
        assert len(await repository.list_sessions()) == 2

    @pytest.mark.asyncio
    async def test_complete_session_should_raise_not_found(
        self, repository: SqlAlchemySessionRepository, monday_morning: datetime
    ) -> None:
        manager = SessionLifecycleManager(repository, clock=lambda: monday_morning)

        with pytest.raises(SessionNotFoundError):
            await manager.complete_session(404)

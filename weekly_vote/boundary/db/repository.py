"""
SQLAlchemy session repository.

Implements the SessionRepository contract over an AsyncSession using
VoteSessionCRUD. Database failures are logged and re-raised as
PersistenceError carrying the operation name and the affected session id.

Dependencies: sqlalchemy, weekly_vote.boundary.db.CRUD, weekly_vote.core
System role: Persistence adapter for the vote session lifecycle
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import AsyncIterator, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weekly_vote.boundary.db.CRUD.vote_session_crud import vote_session_crud
from weekly_vote.boundary.db.locks import acquire_xact_lock
from weekly_vote.boundary.db.models.vote_session_model import VoteSessionModel
from weekly_vote.core.exceptions import PersistenceError, SessionNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_LOCK_NAME = "vote-session-lifecycle"


class SqlAlchemySessionRepository:
    """
    Vote session repository backed by an async SQLAlchemy session.

    One instance wraps one AsyncSession (one request or one scheduler
    tick). Writes are flushed immediately and committed when the
    enclosing transaction() block exits.
    """

    def __init__(self, db: AsyncSession, lock_name: str = DEFAULT_LOCK_NAME) -> None:
        """
        Initialize repository.

        Args:
            db: Async SQLAlchemy session
            lock_name: Advisory lock guarding lifecycle transactions
        """
        self.db = db
        self.lock_name = lock_name

    @asynccontextmanager
    async def _translate_errors(
        self,
        operation: str,
        session_id: int | None = None,
    ) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:{operation} - {type(e).__name__}: {e}",
                extra={"operation": operation, "session_id": session_id},
            )
            raise PersistenceError(
                f"Vote session store failed during {operation}",
                operation=operation,
                session_id=session_id,
            ) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Run a block as one unit of work under the lifecycle lock.

        Commits when the block finishes; rolls back on any exception,
        including cancellation from a caller timeout.
        """
        try:
            async with self._translate_errors("acquire_lock"):
                await acquire_xact_lock(self.db, self.lock_name)
            yield
            async with self._translate_errors("commit"):
                await self.db.commit()
        except (Exception, asyncio.CancelledError):
            await self.db.rollback()
            raise

    async def find_active_sessions(self) -> list[VoteSessionModel]:
        """All sessions with is_active=True, highest id first."""
        async with self._translate_errors("find_active_sessions"):
            return list(await vote_session_crud.get_active(self.db))

    async def find_session_by_week(self, week_start_date: date) -> VoteSessionModel | None:
        """Inactive, incomplete session for the given Monday."""
        async with self._translate_errors("find_session_by_week"):
            return await vote_session_crud.get_reusable_for_week(self.db, week_start_date)

    async def update_session_state(
        self,
        session_id: int,
        is_active: bool,
        is_completed: bool,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> VoteSessionModel:
        """
        Write state flags, and the window bounds when given.

        Raises:
            SessionNotFoundError: If no row has session_id
            PersistenceError: If the database operation fails
        """
        async with self._translate_errors("update_session_state", session_id):
            updated = await vote_session_crud.set_state(
                self.db,
                session_id,
                is_active=is_active,
                is_completed=is_completed,
                start_time=start_time,
                end_time=end_time,
            )
        if updated is None:
            raise SessionNotFoundError(session_id)
        return updated

    async def insert_session(
        self,
        week_start_date: date,
        start_time: datetime,
        end_time: datetime | None,
        is_active: bool,
        is_completed: bool,
    ) -> VoteSessionModel:
        """Create a session row; the database assigns the id."""
        async with self._translate_errors("insert_session"):
            return await vote_session_crud.create(
                self.db,
                week_start_date=week_start_date,
                start_time=start_time,
                end_time=end_time,
                is_active=is_active,
                is_completed=is_completed,
                disabled_days=[],
            )

    async def find_current_open_session(
        self, include_votes: bool = False
    ) -> VoteSessionModel | None:
        """Newest session with is_active=True and is_completed=False."""
        async with self._translate_errors("find_current_open_session"):
            return await vote_session_crud.get_open(self.db, include_votes=include_votes)

    async def update_disabled_days(
        self, session_id: int, days: list[str]
    ) -> VoteSessionModel:
        """
        Replace the disabled day codes of a session.

        Raises:
            SessionNotFoundError: If no row has session_id
            PersistenceError: If the database operation fails
        """
        async with self._translate_errors("update_disabled_days", session_id):
            updated = await vote_session_crud.update_by_id(
                self.db, session_id, disabled_days=list(days)
            )
        if updated is None:
            raise SessionNotFoundError(session_id)
        return updated

    async def list_sessions(
        self, limit: int | None = None, offset: int = 0
    ) -> Sequence[VoteSessionModel]:
        """Sessions newest first."""
        async with self._translate_errors("list_sessions"):
            return await vote_session_crud.get_history(self.db, limit=limit, offset=offset)

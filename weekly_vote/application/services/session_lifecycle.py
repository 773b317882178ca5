"""
Weekly vote session lifecycle manager.

Creates, activates, expires and de-duplicates the weekly availability
polling window. Every mutating operation is one unit of work: it runs inside
repository.transaction(), which holds the lifecycle lock and commits or
rolls back as a whole.

Dependencies: weekly_vote.core, weekly_vote.observability
System role: Vote session state machine
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, Sequence

from weekly_vote.boundary.db.models.vote_session_model import VoteSessionModel
from weekly_vote.core import time_calculator
from weekly_vote.core.exceptions import InvariantViolation, NoActiveSessionError
from weekly_vote.core.session_repository import SessionRepository
from weekly_vote.core.vote_days import normalize_day_codes
from weekly_vote.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    session_log_context,
)

logger = logging.getLogger(__name__)


class SessionLifecycleManager:
    """
    State machine over persisted vote sessions.

    States:
        ActiveOpen: is_active, not is_completed, deadline not passed
        Expired: is_active, deadline passed, not yet archived
        Archived: not is_active, is_completed (terminal)
        InactiveReusable: not is_active, not is_completed; reactivated in place

    Holds no state between calls; the repository and clock are injected.
    """

    def __init__(
        self,
        repository: SessionRepository,
        clock: Callable[[], datetime] = time_calculator.current_time,
    ) -> None:
        """
        Initialize lifecycle manager.

        Args:
            repository: Vote session persistence
            clock: Returns "now"; defaults to the current KST time
        """
        self.repository = repository
        self.clock = clock

    @asynccontextmanager
    async def _unit_of_work(self, operation: str) -> AsyncIterator[None]:
        async with self._logged(operation):
            async with self.repository.transaction():
                yield

    @asynccontextmanager
    async def _logged(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:{operation} - {type(e).__name__}: {e}",
                e,
                operation=operation,
            )
            raise

    async def deactivate_expired_sessions(self) -> int:
        """
        Archive every active session whose deadline has passed.

        Idempotent: a second run finds nothing left to expire.

        Returns:
            int: Number of sessions archived
        """
        async with self._unit_of_work("deactivate_expired_sessions"):
            return await self._deactivate_expired()

    async def ensure_single_active_session(self) -> None:
        """
        Keep only the highest-id active session; archive the others.
        """
        async with self._unit_of_work("ensure_single_active_session"):
            await self._ensure_single_active()

    async def get_active_session(self, include_votes: bool = False) -> VoteSessionModel | None:
        """
        Return the current open session after repairing drift.

        Expires overdue sessions, removes duplicates, then reads the newest
        active and incomplete session.

        Args:
            include_votes: Eager-load votes and their users (id, name)

        Returns:
            VoteSessionModel if a session is open, None otherwise
        """
        async with self._unit_of_work("get_active_session"):
            await self._deactivate_expired()
            await self._ensure_single_active()
            return await self.repository.find_current_open_session(include_votes=include_votes)

    async def create_next_week_session(self) -> VoteSessionModel:
        """
        Open the polling window for next week, without ever duplicating it.

        1. An open session already exists: returned unchanged.
        2. An inactive, incomplete row exists for next Monday: reactivated
           in place with a refreshed window.
        3. Otherwise a new active row is inserted.

        The window runs from this Monday 00:01 KST to next Friday
        23:59:59.999 KST.

        Returns:
            VoteSessionModel: The open session for the cycle
        """
        now = self.clock()
        week_start = time_calculator.start_of_next_week(now)
        start_time = time_calculator.discussion_start(now)
        end_time = time_calculator.end_of_week(week_start)

        async with self._unit_of_work("create_next_week_session"):
            open_session = await self.repository.find_current_open_session()
            if open_session is not None:
                log_with_context(
                    logger,
                    logging.INFO,
                    f"{__name__}:create_next_week_session - Open session exists, not creating",
                    **session_log_context(open_session),
                )
                return open_session

            reusable = await self.repository.find_session_by_week(week_start.date())
            if reusable is not None:
                session = await self.repository.update_session_state(
                    reusable.id,
                    is_active=True,
                    is_completed=False,
                    start_time=start_time,
                    end_time=end_time,
                )
                log_with_context(
                    logger,
                    logging.INFO,
                    f"{__name__}:create_next_week_session - Reactivated inactive session",
                    **session_log_context(session),
                )
                return session

            session = await self.repository.insert_session(
                week_start_date=week_start.date(),
                start_time=start_time,
                end_time=end_time,
                is_active=True,
                is_completed=False,
            )
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:create_next_week_session - Created session",
                end_time=end_time,
                **session_log_context(session),
            )
            return session

    async def validate_and_fix_session_state(self) -> None:
        """Expire overdue sessions, then remove duplicate active sessions."""
        async with self._unit_of_work("validate_and_fix_session_state"):
            expired = await self._deactivate_expired()
            await self._ensure_single_active()
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:validate_and_fix_session_state - Session state validated",
            expired=expired,
        )

    async def update_disabled_days(self, days: object) -> VoteSessionModel:
        """
        Close days of the current open session for voting.

        Args:
            days: Day codes or Korean date labels, as a list or JSON string

        Returns:
            VoteSessionModel: The updated open session

        Raises:
            ValueError: If a day is not Monday to Friday
            NoActiveSessionError: If no session is open
        """
        codes = normalize_day_codes(days)
        async with self._unit_of_work("update_disabled_days"):
            # an overdue session is Expired, not open
            await self._deactivate_expired()
            await self._ensure_single_active()
            open_session = await self.repository.find_current_open_session()
            if open_session is None:
                raise NoActiveSessionError()
            session = await self.repository.update_disabled_days(open_session.id, codes)
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:update_disabled_days - Disabled days updated",
                disabled_days=",".join(codes),
                **session_log_context(session),
            )
            return session

    async def list_sessions(
        self, limit: int | None = None, offset: int = 0
    ) -> Sequence[VoteSessionModel]:
        """Session history, newest first. Read-only; no lock is taken."""
        async with self._logged("list_sessions"):
            return await self.repository.list_sessions(limit=limit, offset=offset)

    async def complete_session(self, session_id: int) -> VoteSessionModel:
        """
        Close a session explicitly, ending its window now.

        The session is archived (is_active=False, is_completed=True) and
        end_time is set to the current time. Archived sessions are never
        reactivated, so create_next_week_session inserts a fresh row for
        the same week afterwards.

        Args:
            session_id: Id of the session to close

        Returns:
            VoteSessionModel: The archived session

        Raises:
            ValueError: If session_id is not a positive integer
            SessionNotFoundError: If no session has session_id
        """
        if session_id < 1:
            raise ValueError(f"Invalid vote session id: {session_id}")

        async with self._unit_of_work("complete_session"):
            session = await self.repository.update_session_state(
                session_id,
                is_active=False,
                is_completed=True,
                end_time=self.clock(),
            )
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:complete_session - Session closed",
                **session_log_context(session),
            )
            return session

    async def _deactivate_expired(self) -> int:
        now = self.clock()
        count = 0
        for session in await self.repository.find_active_sessions():
            if not time_calculator.is_expired(session, now):
                continue
            deadline = time_calculator.session_deadline(session)
            await self.repository.update_session_state(
                session.id, is_active=False, is_completed=True
            )
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:deactivate_expired_sessions - Expired session archived",
                session_id=session.id,
                deadline=deadline,
            )
            count += 1
        return count

    async def _ensure_single_active(self) -> None:
        active = await self.repository.find_active_sessions()
        if len(active) <= 1:
            return

        await self._archive_duplicates(active)

        remaining = await self.repository.find_active_sessions()
        if len(remaining) > 1:
            violation = InvariantViolation([s.id for s in remaining])
            logger.warning(f"{__name__}:ensure_single_active_session - {violation}")
            await self._archive_duplicates(remaining)

    async def _archive_duplicates(self, active: Sequence[VoteSessionModel]) -> None:
        # id is the sole recency key
        keep, *duplicates = sorted(active, key=lambda s: s.id, reverse=True)
        for session in duplicates:
            await self.repository.update_session_state(
                session.id, is_active=False, is_completed=True
            )
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:ensure_single_active_session - Duplicate active session archived",
                session_id=session.id,
                kept_session_id=keep.id,
            )

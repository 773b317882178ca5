"""
Session repository contract.

The lifecycle manager reaches persisted vote sessions only through this
interface, so the SQLAlchemy implementation can be swapped for a test
double.

Dependencies: typing (stdlib)
System role: Persistence port for the vote session lifecycle
"""

from contextlib import AbstractAsyncContextManager
from datetime import date, datetime
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from weekly_vote.boundary.db.models.vote_session_model import VoteSessionModel


class SessionRepository(Protocol):
    """Persistence operations required by the vote session lifecycle."""

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """
        Unit of work guarded by the lifecycle lock.

        Commits on normal exit and rolls back on any exception, including
        cancellation.
        """
        ...

    async def find_active_sessions(self) -> list["VoteSessionModel"]:
        """All sessions with is_active=True, highest id first."""
        ...

    async def find_session_by_week(
        self, week_start_date: date
    ) -> "VoteSessionModel | None":
        """Inactive, incomplete session for the given Monday."""
        ...

    async def update_session_state(
        self,
        session_id: int,
        is_active: bool,
        is_completed: bool,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> "VoteSessionModel":
        """Write state flags, and the window bounds when given."""
        ...

    async def insert_session(
        self,
        week_start_date: date,
        start_time: datetime,
        end_time: datetime | None,
        is_active: bool,
        is_completed: bool,
    ) -> "VoteSessionModel":
        """Create a session row; the store assigns the id."""
        ...

    async def find_current_open_session(
        self, include_votes: bool = False
    ) -> "VoteSessionModel | None":
        """Newest session with is_active=True and is_completed=False."""
        ...

    async def update_disabled_days(
        self, session_id: int, days: list[str]
    ) -> "VoteSessionModel":
        """Replace the disabled day codes of a session."""
        ...

    async def list_sessions(
        self, limit: int | None = None, offset: int = 0
    ) -> Sequence["VoteSessionModel"]:
        """Sessions newest first."""
        ...

"""
Vote session CRUD operations.

Provides Create, Read, Update operations for VoteSessionModel with the
state queries the weekly lifecycle needs.

Dependencies: sqlalchemy, weekly_vote.boundary.db.models
System role: Vote session persistence operations
"""

from datetime import date
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from weekly_vote.boundary.db.models.vote_model import VoteModel
from weekly_vote.boundary.db.models.vote_session_model import VoteSessionModel
from weekly_vote.boundary.db.CRUD.base_crud import BaseCRUD


class VoteSessionCRUD(BaseCRUD[VoteSessionModel]):
    """
    CRUD operations for VoteSessionModel.

    Extends BaseCRUD with lifecycle state queries and eager loading of
    votes with their members.
    """

    def __init__(self) -> None:
        """Initialize VoteSessionCRUD with VoteSessionModel."""
        super().__init__(VoteSessionModel)

    async def get_active(self, session: AsyncSession) -> Sequence[VoteSessionModel]:
        """
        Retrieve every session flagged active, highest id first.

        Args:
            session: Async database session

        Returns:
            Sequence of active VoteSessionModels
        """
        stmt = (
            select(VoteSessionModel)
            .where(VoteSessionModel.is_active.is_(True))
            .order_by(VoteSessionModel.id.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_reusable_for_week(
        self,
        session: AsyncSession,
        week_start_date: date,
    ) -> VoteSessionModel | None:
        """
        Retrieve an inactive, incomplete session for the given Monday.

        Args:
            session: Async database session
            week_start_date: Monday of the polled week

        Returns:
            Oldest matching VoteSessionModel, None if not found
        """
        stmt = (
            select(VoteSessionModel)
            .where(
                VoteSessionModel.is_active.is_(False),
                VoteSessionModel.is_completed.is_(False),
                VoteSessionModel.week_start_date == week_start_date,
            )
            .order_by(VoteSessionModel.id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_open(
        self,
        session: AsyncSession,
        include_votes: bool = False,
    ) -> VoteSessionModel | None:
        """
        Retrieve the newest active, incomplete session.

        Ordered by created_at, then id, both descending.

        Args:
            session: Async database session
            include_votes: Eager-load votes and each vote's user

        Returns:
            VoteSessionModel if one is open, None otherwise
        """
        stmt = (
            select(VoteSessionModel)
            .where(
                VoteSessionModel.is_active.is_(True),
                VoteSessionModel.is_completed.is_(False),
            )
            .order_by(VoteSessionModel.created_at.desc(), VoteSessionModel.id.desc())
            .limit(1)
        )
        if include_votes:
            stmt = stmt.options(
                selectinload(VoteSessionModel.votes).selectinload(VoteModel.user)
            ).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_history(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[VoteSessionModel]:
        """
        Retrieve sessions newest first, for the admin history view.

        Args:
            session: Async database session
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            Sequence of VoteSessionModels
        """
        stmt = (
            select(VoteSessionModel)
            .order_by(VoteSessionModel.id.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def set_state(
        self,
        session: AsyncSession,
        id: int,
        is_active: bool,
        is_completed: bool,
        **window,
    ) -> VoteSessionModel | None:
        """
        Update state flags, plus start_time/end_time when supplied.

        Args:
            session: Async database session
            id: Vote session id
            is_active: New active flag
            is_completed: New completed flag
            **window: Optional start_time and end_time; None values are skipped

        Returns:
            Updated VoteSessionModel if found, None otherwise
        """
        fields = {"is_active": is_active, "is_completed": is_completed}
        fields.update({k: v for k, v in window.items() if v is not None})
        return await self.update_by_id(session, id, **fields)


vote_session_crud = VoteSessionCRUD()

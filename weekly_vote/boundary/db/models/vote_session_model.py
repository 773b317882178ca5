"""
Vote session ORM model.

Represents one weekly availability polling window for the team.

Dependencies: sqlalchemy, weekly_vote.boundary.db.base
System role: Vote session persistence for the weekly lifecycle
"""

from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from weekly_vote.boundary.db.base import Base, IntegerIDMixin, TimestampMixin


class VoteSessionModel(Base, IntegerIDMixin, TimestampMixin):
    """
    Vote session ORM model for the weekly polling window.

    A session polls availability for the week starting week_start_date.
    Discussion opens at start_time (the Monday before, 00:01 KST) and
    voting closes at end_time (Friday of the polled week, 23:59:59.999 KST).
    Rows are never deleted; is_completed=True is terminal.

    Attributes:
        id: Integer primary key, increasing with creation order
        week_start_date: Monday of the polled week (KST calendar date)
        start_time: When discussion opens
        end_time: Voting deadline; None falls back to Friday of the week
        is_active: Currently the open polling window
        is_completed: Closed by expiry, de-duplication, or explicit completion
        disabled_days: Day codes (MON..FRI) closed for voting by an admin
        votes: Vote rows cast against this session
        created_at: Row creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    States:
        is_active and not is_completed: open (or expired, awaiting archive)
        not is_active and is_completed: archived
        not is_active and not is_completed: reusable, activated in place
    """

    __tablename__ = "vote_sessions"
    __table_args__ = (
        Index("ix_vote_sessions_state", "is_active", "is_completed"),
        Index("ix_vote_sessions_week_start_date", "week_start_date"),
    )

    week_start_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Monday of the polled week",
    )
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        doc="Discussion period start",
    )
    end_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        doc="Voting deadline",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    is_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    disabled_days: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Day codes closed for voting",
    )

    votes = relationship(
        "VoteModel",
        back_populates="vote_session",
        order_by="VoteModel.id",
    )

    def __repr__(self) -> str:
        return (
            f"<VoteSessionModel id={self.id} week={self.week_start_date} "
            f"active={self.is_active} completed={self.is_completed}>"
        )

"""
Vote session domain models and schemas.

Request/response schemas for vote session operations. Timestamps of the
polling window are rendered in KST; created_at/updated_at stay in UTC.

Dependencies: pydantic, weekly_vote.core
System role: Vote session API contracts
"""

from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from weekly_vote.core.time_calculator import session_deadline, to_kst
from weekly_vote.core.vote_days import parse_vote_days


def _as_utc(value: datetime) -> datetime:
    # audit columns are written in UTC; SQLite returns them naive
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class VoteUserResponse(BaseModel):
    """Minimal member projection attached to a vote."""

    id: int
    name: str


class VoteResponse(BaseModel):
    """A member's availability answer."""

    id: int
    user: VoteUserResponse | None
    selected_days: list[str]
    created_at: datetime


class VoteSessionResponse(BaseModel):
    """Response schema for vote session operations."""

    id: int
    week_start_date: date
    start_time: datetime
    end_time: datetime = Field(description="Explicit deadline, or Friday 23:59:59.999 KST")
    is_active: bool
    is_completed: bool
    disabled_days: list[str]
    created_at: datetime
    updated_at: datetime
    votes: list[VoteResponse] | None = None
    total_participants: int | None = None

    @classmethod
    def from_model(cls, session: Any, include_votes: bool = False) -> "VoteSessionResponse":
        """
        Build a response from a VoteSessionModel.

        Args:
            session: VoteSessionModel instance
            include_votes: Serialize the eager-loaded votes; leave False when
                votes were not loaded

        Returns:
            VoteSessionResponse
        """
        votes = None
        total_participants = None
        if include_votes:
            votes = [
                VoteResponse(
                    id=vote.id,
                    user=(
                        VoteUserResponse(id=vote.user.id, name=vote.user.name)
                        if vote.user is not None
                        else None
                    ),
                    selected_days=parse_vote_days(vote.selected_days),
                    created_at=_as_utc(vote.created_at),
                )
                for vote in session.votes
            ]
            total_participants = len({vote.user_id for vote in session.votes})

        return cls(
            id=session.id,
            week_start_date=session.week_start_date,
            start_time=to_kst(session.start_time),
            end_time=session_deadline(session),
            is_active=session.is_active,
            is_completed=session.is_completed,
            disabled_days=parse_vote_days(session.disabled_days),
            created_at=_as_utc(session.created_at),
            updated_at=_as_utc(session.updated_at),
            votes=votes,
            total_participants=total_participants,
        )


class DisabledDaysRequest(BaseModel):
    """Request schema for closing days of the open session."""

    disabled_days: list[str] = Field(
        default_factory=list,
        description="Day codes (MON..FRI) or Korean date labels such as '11/3(월)'",
    )


class SessionMaintenanceResponse(BaseModel):
    """Result of a maintenance trigger (validate, expire)."""

    status: str
    deactivated: int | None = None

"""API request/response schemas."""

from weekly_vote.models.vote_session import (
    DisabledDaysRequest,
    SessionMaintenanceResponse,
    VoteResponse,
    VoteSessionResponse,
    VoteUserResponse,
)

__all__ = [
    "DisabledDaysRequest",
    "SessionMaintenanceResponse",
    "VoteResponse",
    "VoteSessionResponse",
    "VoteUserResponse",
]

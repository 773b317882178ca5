"""
Core business logic module.

Contains the exception hierarchy, KST week arithmetic, vote day parsing,
and the persistence contract used by the session lifecycle.
"""

from weekly_vote.core.exceptions import (
    WeeklyVoteException,
    PersistenceError,
    SessionNotFoundError,
    NoActiveSessionError,
    InvariantViolation,
)
from weekly_vote.core.session_repository import SessionRepository
from weekly_vote.core import time_calculator

__all__ = [
    # Exceptions
    "WeeklyVoteException",
    "PersistenceError",
    "SessionNotFoundError",
    "NoActiveSessionError",
    "InvariantViolation",
    # Contracts
    "SessionRepository",
    # Calendar
    "time_calculator",
]

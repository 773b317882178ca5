"""
Exception hierarchy for the weekly vote service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class WeeklyVoteException(Exception):
    """Base exception for all weekly vote application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PersistenceError(WeeklyVoteException):
    """Raised when the session store fails (connectivity, constraint violation)."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        session_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            operation: Repository operation that failed
            session_id: Affected vote session id, if known
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if session_id is not None:
            details["session_id"] = session_id
        super().__init__(message, details)


class SessionNotFoundError(WeeklyVoteException):
    """Raised when a vote session cannot be found."""

    def __init__(self, session_id: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Vote session not found: {session_id}", details)


class NoActiveSessionError(WeeklyVoteException):
    """Raised when an operation needs the open session and there is none."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("No active vote session", details)


class InvariantViolation(WeeklyVoteException):
    """
    More than one active session observed after de-duplication.

    The lifecycle manager logs and repairs this condition instead of
    raising it; the class is available to callers that audit state.
    """

    def __init__(self, active_ids: list[int], details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["active_ids"] = active_ids
        super().__init__(
            f"Expected at most one active vote session, found {len(active_ids)}",
            details,
        )

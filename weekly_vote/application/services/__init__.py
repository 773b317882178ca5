"""Service orchestrators."""

from .session_lifecycle import SessionLifecycleManager

__all__ = [
    "SessionLifecycleManager",
]

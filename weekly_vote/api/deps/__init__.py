"""API-specific dependencies."""

from .dependencies import (
    get_lifecycle_manager,
    get_session_repository,
    get_settings_dependency,
)

__all__ = [
    "get_lifecycle_manager",
    "get_session_repository",
    "get_settings_dependency",
]

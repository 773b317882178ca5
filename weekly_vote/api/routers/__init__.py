"""API routers."""

from .health import router as health_router
from .vote_sessions import router as vote_sessions_router

__all__ = [
    "health_router",
    "vote_sessions_router",
]

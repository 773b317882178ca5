"""
FastAPI application with assembled routers.

Initializes FastAPI app with the vote session routers and configures
uvicorn server.

Dependencies: fastapi, weekly_vote.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import logging
from weekly_vote.configs import get_settings
from weekly_vote.boundary.db import get_async_engine
from weekly_vote.observability import RequestLoggingMiddleware, configure_logging
from .routers import health_router, vote_sessions_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    # Startup
    logger.info(f"{settings.app_name} starting ({settings.environment})")

    yield

    # Shutdown
    await get_async_engine().dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Weekly availability vote session lifecycle",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(vote_sessions_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "weekly_vote.api.main:app",
        host="0.0.0.0",
        port=8000,
    )

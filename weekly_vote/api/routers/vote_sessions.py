"""
Vote session API endpoints.

Routes:
- GET /vote-sessions/active - Current open session, optionally with votes
- GET /admin/vote-sessions - Session history
- POST /admin/vote-sessions/create - Open next week's session
- POST /admin/vote-sessions/validate - Expire overdue and duplicate sessions
- POST /admin/vote-sessions/deactivate-expired - Expire overdue sessions
- PUT /admin/vote-sessions/active/disabled-days - Close days of the open session
- POST /admin/vote-sessions/{session_id}/close - Close a session explicitly

Every lifecycle call is bounded by lifecycle.operation_timeout_seconds.

Dependencies: weekly_vote.application.services, weekly_vote.models
System role: Vote session trigger HTTP API
"""

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query

from weekly_vote.api.deps import get_lifecycle_manager, get_settings_dependency
from weekly_vote.application.services import SessionLifecycleManager
from weekly_vote.configs import Settings
from weekly_vote.core.exceptions import (
    NoActiveSessionError,
    PersistenceError,
    SessionNotFoundError,
)
from weekly_vote.models.vote_session import (
    DisabledDaysRequest,
    SessionMaintenanceResponse,
    VoteSessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["vote-sessions"])

T = TypeVar("T")


async def _bounded(call: Awaitable[T], settings: Settings, operation: str) -> T:
    """Await a lifecycle call within the configured timeout, mapping errors to HTTP."""
    try:
        return await asyncio.wait_for(
            call, timeout=settings.lifecycle.operation_timeout_seconds
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (NoActiveSessionError, SessionNotFoundError) as e:
        raise HTTPException(status_code=404, detail=e.message)
    except asyncio.TimeoutError:
        logger.error(f"{__name__}:{operation} - TimeoutError: lifecycle operation timed out")
        raise HTTPException(status_code=504, detail=f"{operation} timed out")
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=f"{operation} failed: {e.message}")
    except Exception as e:
        logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"{operation} failed: {str(e)}")


@router.get("/vote-sessions/active", response_model=VoteSessionResponse | None)
async def get_active_session(
    include_votes: bool | None = Query(
        default=None, description="Eager-load votes; defaults to configuration"
    ),
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> VoteSessionResponse | None:
    """
    Get the current open vote session.

    Repairs expired and duplicate sessions before reading.

    Args:
        include_votes: Attach votes with their member (id, name)
        manager: Injected SessionLifecycleManager
        settings: Injected Settings

    Returns:
        VoteSessionResponse, or null when no session is open

    Raises:
        HTTPException(500): Persistence failed
        HTTPException(504): Operation timed out
    """
    if include_votes is None:
        include_votes = settings.lifecycle.include_votes_default

    session = await _bounded(
        manager.get_active_session(include_votes=include_votes),
        settings,
        "get_active_session",
    )
    if session is None:
        return None
    return VoteSessionResponse.from_model(session, include_votes=include_votes)


@router.get("/admin/vote-sessions", response_model=list[VoteSessionResponse])
async def list_sessions(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> list[VoteSessionResponse]:
    """List vote sessions, newest first."""
    sessions = await _bounded(
        manager.list_sessions(limit=limit, offset=offset), settings, "list_sessions"
    )
    return [VoteSessionResponse.from_model(session) for session in sessions]


@router.post("/admin/vote-sessions/create", response_model=VoteSessionResponse)
async def create_next_week_session(
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> VoteSessionResponse:
    """
    Open the vote session for next week.

    Overdue sessions are expired first so that last week's session does not
    block the new one. Returns the existing open session when there is one.

    Raises:
        HTTPException(500): Persistence failed
        HTTPException(504): Operation timed out
    """
    await _bounded(
        manager.validate_and_fix_session_state(), settings, "create_next_week_session"
    )
    session = await _bounded(
        manager.create_next_week_session(), settings, "create_next_week_session"
    )
    return VoteSessionResponse.from_model(session)


@router.post("/admin/vote-sessions/validate", response_model=SessionMaintenanceResponse)
async def validate_session_state(
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> SessionMaintenanceResponse:
    """Expire overdue sessions and archive duplicate active sessions."""
    await _bounded(
        manager.validate_and_fix_session_state(), settings, "validate_and_fix_session_state"
    )
    return SessionMaintenanceResponse(status="ok")


@router.post(
    "/admin/vote-sessions/deactivate-expired", response_model=SessionMaintenanceResponse
)
async def deactivate_expired_sessions(
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> SessionMaintenanceResponse:
    """Archive every active session past its deadline."""
    count = await _bounded(
        manager.deactivate_expired_sessions(), settings, "deactivate_expired_sessions"
    )
    return SessionMaintenanceResponse(status="ok", deactivated=count)


@router.put(
    "/admin/vote-sessions/active/disabled-days", response_model=VoteSessionResponse
)
async def update_disabled_days(
    request: DisabledDaysRequest,
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> VoteSessionResponse:
    """
    Close days of the open session for voting.

    Args:
        request: DisabledDaysRequest with day codes or Korean date labels

    Raises:
        HTTPException(400): Unknown day
        HTTPException(404): No open session
        HTTPException(500): Persistence failed
        HTTPException(504): Operation timed out
    """
    session = await _bounded(
        manager.update_disabled_days(request.disabled_days), settings, "update_disabled_days"
    )
    return VoteSessionResponse.from_model(session)


@router.post("/admin/vote-sessions/{session_id}/close", response_model=VoteSessionResponse)
async def complete_session(
    session_id: str,
    manager: SessionLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings_dependency),
) -> VoteSessionResponse:
    """
    Close a vote session now, whatever its deadline.

    Raises:
        HTTPException(400): session_id is not a positive integer
        HTTPException(404): Session not found
        HTTPException(500): Persistence failed
        HTTPException(504): Operation timed out
    """
    try:
        parsed_id = int(session_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid vote session id: {session_id}")

    session = await _bounded(
        manager.complete_session(parsed_id), settings, "complete_session"
    )
    return VoteSessionResponse.from_model(session)

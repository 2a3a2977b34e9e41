"""Session API routes: login creates a session, logout ends it"""

from datetime import datetime
from pydantic import BaseModel
from fastapi import APIRouter, Depends

from ..core.config import settings
from ..core.session import SessionManager
from ..errors import SessionNotFoundError
from .dependencies import get_session_manager

router = APIRouter(prefix="/api/session", tags=["Session"])


class StartSessionRequest(BaseModel):
    user_id: str


class SessionResponse(BaseModel):
    session_id: str
    user_id: str
    created_at: datetime


@router.post("", response_model=SessionResponse)
async def start_session(
    request: StartSessionRequest,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Start a checkout session for an authenticated user"""
    sessions.cleanup_old_sessions(settings.session_max_age_hours)
    session = sessions.create_session(request.user_id)
    return SessionResponse(
        session_id=session.session_id,
        user_id=session.user_id,
        created_at=session.created_at,
    )


@router.delete("/{session_id}")
async def end_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
):
    """End a session, discarding its cart and coupon"""
    if not sessions.end_session(session_id):
        raise SessionNotFoundError(session_id)
    return {"session_id": session_id, "message": "Session ended"}

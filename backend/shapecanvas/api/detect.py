"""POST /api/sessions/{id}/detect — add a detected outline as a polygon."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from shapecanvas.api.canvas import session_response
from shapecanvas.dependencies import get_sessions
from shapecanvas.detection.service import add_detected_shape, detect_shape
from shapecanvas.engine.session import SessionStore
from shapecanvas.models.requests import DetectRequest
from shapecanvas.models.responses import SessionResponse

router = APIRouter(prefix="/sessions")


@router.post("/{session_id}/detect", response_model=SessionResponse)
async def detect(
    session_id: str,
    req: DetectRequest,
    sessions: SessionStore = Depends(get_sessions),
) -> SessionResponse:
    session = sessions.get(session_id)
    outline = await detect_shape(req.x, req.y)
    session.replace_state(add_detected_shape(session.state, outline, session.config))
    return session_response(session)

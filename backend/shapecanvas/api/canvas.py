"""/api/sessions/* — canvas sessions driven by dispatched actions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from shapecanvas.dependencies import get_sessions
from shapecanvas.engine.session import CanvasSession, SessionStore
from shapecanvas.export.serializer import import_shapes, load_shapes, shapes_to_data
from shapecanvas.models.requests import DispatchRequest, ImportRequest
from shapecanvas.models.responses import ExportResponse, SessionResponse

router = APIRouter(prefix="/sessions")
logger = logging.getLogger(__name__)


def session_response(session: CanvasSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.id,
        state=session.state.model_dump(mode="json", by_alias=True, exclude_none=True),
        is_drawing=session.is_drawing,
        actions_applied=session.actions_applied,
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(sessions: SessionStore = Depends(get_sessions)) -> SessionResponse:
    return session_response(sessions.create())


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, sessions: SessionStore = Depends(get_sessions)) -> SessionResponse:
    return session_response(sessions.get(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, sessions: SessionStore = Depends(get_sessions)) -> None:
    sessions.delete(session_id)


@router.post("/{session_id}/actions", response_model=SessionResponse)
async def dispatch_action(
    session_id: str,
    req: DispatchRequest,
    sessions: SessionStore = Depends(get_sessions),
) -> SessionResponse:
    session = sessions.get(session_id)
    session.dispatch(req.action)
    return session_response(session)


@router.get("/{session_id}/export", response_model=ExportResponse)
async def export_session(session_id: str, sessions: SessionStore = Depends(get_sessions)) -> ExportResponse:
    session = sessions.get(session_id)
    return ExportResponse(session_id=session.id, shapes=shapes_to_data(session.all_shapes))


@router.post("/{session_id}/import", response_model=SessionResponse)
async def import_session(
    session_id: str,
    req: ImportRequest,
    sessions: SessionStore = Depends(get_sessions),
) -> SessionResponse:
    session = sessions.get(session_id)
    shapes = import_shapes(req.shapes)
    session.replace_state(load_shapes(session.state, shapes, replace=req.replace))
    logger.info("Session %s: imported %d shapes", session.id, len(shapes))
    return session_response(session)

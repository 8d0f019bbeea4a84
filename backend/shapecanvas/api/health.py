"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from shapecanvas.dependencies import get_sessions
from shapecanvas.engine.session import SessionStore
from shapecanvas.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(sessions: SessionStore = Depends(get_sessions)) -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", sessions=sessions.count)

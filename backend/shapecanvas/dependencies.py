"""FastAPI dependency injection."""

from __future__ import annotations

from shapecanvas.config import Settings, settings
from shapecanvas.engine.session import SessionStore, get_session_store


def get_settings() -> Settings:
    return settings


def get_sessions() -> SessionStore:
    return get_session_store()

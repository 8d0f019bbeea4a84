"""Shape canvas engine — shape factory, reducer and sessions."""

from shapecanvas.engine.config import EngineConfig
from shapecanvas.engine.factory import create_shape, is_shape_complete
from shapecanvas.engine.reducer import INITIAL_STATE, reduce
from shapecanvas.engine.session import CanvasSession, SessionStore, get_session_store

__all__ = [
    "EngineConfig",
    "create_shape",
    "is_shape_complete",
    "INITIAL_STATE",
    "reduce",
    "CanvasSession",
    "SessionStore",
    "get_session_store",
]

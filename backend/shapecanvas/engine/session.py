"""Canvas sessions — a current state plus the dispatch loop around the reducer.

A session is what a hosting UI holds: it dispatches one action per gesture
and re-reads ``state`` afterwards. The store keeps sessions by id for the
HTTP layer.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from shapecanvas.engine import selectors
from shapecanvas.engine.config import EngineConfig
from shapecanvas.engine.reducer import INITIAL_STATE, reduce
from shapecanvas.errors import SessionNotFoundError
from shapecanvas.models.shapes import ShapeModel
from shapecanvas.models.state import CanvasState

logger = logging.getLogger(__name__)


@dataclass
class CanvasSession:
    """One canvas being edited."""

    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: CanvasState = INITIAL_STATE
    config: EngineConfig = field(default_factory=EngineConfig.from_settings)
    actions_applied: int = 0

    def dispatch(self, action: Any) -> CanvasState:
        """Apply one action (typed or payload dict) and return the new state."""
        self.state = reduce(self.state, action, self.config)
        self.actions_applied += 1
        return self.state

    def replace_state(self, state: CanvasState) -> None:
        self.state = state

    @property
    def all_shapes(self) -> list[ShapeModel]:
        return selectors.all_shapes(self.state)

    @property
    def selected_shape(self) -> ShapeModel | None:
        return selectors.selected_shape(self.state)

    @property
    def is_drawing(self) -> bool:
        return selectors.is_drawing(self.state)


class SessionStore:
    """In-memory registry of canvas sessions."""

    def __init__(self) -> None:
        self._sessions: dict[str, CanvasSession] = {}

    def create(self, config: EngineConfig | None = None) -> CanvasSession:
        session = CanvasSession(config=config or EngineConfig.from_settings())
        self._sessions[session.id] = session
        logger.debug("Created canvas session %s", session.id)
        return session

    def get(self, session_id: str) -> CanvasSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)

    @property
    def count(self) -> int:
        return len(self._sessions)


_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get or create the global SessionStore singleton."""
    global _store
    if _store is None:
        _store = SessionStore()
    return _store

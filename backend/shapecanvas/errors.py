"""Exception hierarchy.

Validation failures raise. Referential misses (an unknown shape id) never
raise: the reducer logs them and returns the state unchanged.
"""

from __future__ import annotations

from typing import Any


class CanvasError(Exception):
    """Base class for all canvas errors."""


class UnknownShapeTypeError(CanvasError, ValueError):
    """A shape type outside the known variants was requested."""

    def __init__(self, shape_type: Any) -> None:
        super().__init__(f"Unknown shape type: {shape_type!r}")
        self.shape_type = shape_type


class InvalidActionError(CanvasError, ValueError):
    """An action payload failed validation."""

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ShapeValidationError(CanvasError, ValueError):
    """Shape records failed validation on import or export."""

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class SessionNotFoundError(CanvasError, KeyError):
    """No canvas session is registered under the requested id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Canvas session not found: {self.session_id}"

"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    sessions: int = 0


class SessionResponse(BaseModel):
    session_id: str
    state: dict[str, Any]
    is_drawing: bool = False
    actions_applied: int = 0


class ExportResponse(BaseModel):
    session_id: str
    shapes: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    detail: str
    errors: list[Any] = Field(default_factory=list)

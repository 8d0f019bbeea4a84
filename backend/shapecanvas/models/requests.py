"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DispatchRequest(BaseModel):
    action: dict[str, Any] = Field(..., description="Canvas action payload, discriminated by 'type'")


class ImportRequest(BaseModel):
    shapes: list[dict[str, Any]] = Field(..., description="Exported shape records")
    replace: bool = Field(default=True, description="Replace existing shapes instead of appending")


class DetectRequest(BaseModel):
    x: float = Field(..., description="Seed x coordinate")
    y: float = Field(..., description="Seed y coordinate")

"""Point and bounding-box value types."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Finite float: NaN/Inf and numeric strings are rejected, ints are accepted.
Coordinate = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Point(BaseModel):
    """A 2D point. Value type, compared by coordinates."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: Coordinate
    y: Coordinate


class Bounds(BaseModel):
    """Axis-aligned bounding box."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

"""Engine configuration — drawing tunables plus the injectable clock and id source."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Callable

from shapecanvas.config import Settings, settings


def now_ms() -> int:
    """Wall-clock time in integer milliseconds."""
    return time.time_ns() // 1_000_000


def new_shape_id() -> str:
    return f"shape_{uuid.uuid4().hex}"


@dataclass
class EngineConfig:
    """Controls how the reducer builds and edits shapes."""

    # Closing a curve: distance to the first anchor, and the minimum anchors first
    snap_distance: float = 20.0
    min_points_for_snap: int = 3

    # Translation applied to a duplicated shape, both axes
    duplicate_offset: float = 12.0

    # Default polygon is a 2d x d quadrilateral
    polygon_default_size: float = 100.0

    default_shape_name: str | None = "Opportunity name"

    # Tolerance for "same point" (closed-shape test)
    point_epsilon: float = 1e-9

    clock: Callable[[], int] = field(default=now_ms, repr=False)
    id_factory: Callable[[], str] = field(default=new_shape_id, repr=False)

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> EngineConfig:
        s = s or settings
        return cls(
            snap_distance=s.snap_distance,
            min_points_for_snap=s.min_points_for_snap,
            duplicate_offset=s.duplicate_offset,
            polygon_default_size=s.polygon_default_size,
            default_shape_name=s.default_shape_name,
            point_epsilon=s.point_epsilon,
        )

"""Conversion from the legacy single-shape editor state."""

from __future__ import annotations

from typing import Sequence

from shapecanvas.engine.config import EngineConfig
from shapecanvas.engine.factory import create_quadratic_curve
from shapecanvas.models.geometry import Point
from shapecanvas.models.shapes import QuadraticCurveShape
from shapecanvas.utils.geometry import calculate_quadratic_control_points

MIGRATED_SHAPE_NAME = "Migrated Shape"


def can_migrate_legacy_state(points: Sequence[Point], is_shape_closed: bool) -> bool:
    return len(points) >= 3 and is_shape_closed


def migrate_legacy_shape(
    points: Sequence[Point],
    curve_control_points: Sequence[Point] = (),
    rotation: float = 0.0,
    config: EngineConfig | None = None,
) -> QuadraticCurveShape | None:
    """Build a quadratic curve from the old editor's points and control points.

    Missing control points are derived with the midpoint rule. Returns None
    when there is nothing to migrate.
    """
    if not points:
        return None

    base = create_quadratic_curve(points[0], config)
    control_points = (
        list(curve_control_points)
        if curve_control_points
        else calculate_quadratic_control_points(points)
    )
    return QuadraticCurveShape.model_validate(
        {
            **base.model_dump(),
            "points": list(points),
            "control_points": control_points,
            "rotation": rotation,
            "name": MIGRATED_SHAPE_NAME,
        }
    )

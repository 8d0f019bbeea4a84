"""Shape factory — builds each variant with identity, timestamps and default style."""

from __future__ import annotations

from typing import Any

from shapecanvas.engine.config import EngineConfig
from shapecanvas.errors import UnknownShapeTypeError
from shapecanvas.models.geometry import Point
from shapecanvas.models.shapes import (
    CubicCurveShape,
    PolygonShape,
    QuadraticCurveShape,
    ShapeModel,
)
from shapecanvas.utils.geometry import is_closed

_DEFAULT_CONFIG = EngineConfig()


def default_shape_styles() -> dict[str, Any]:
    return {
        "fill": "lightblue",
        "stroke": "blue",
        "stroke_width": 2.0,
        "opacity": 1.0,
        "visible": True,
        "scale_x": 1.0,
        "scale_y": 1.0,
        "rotation": 0.0,
        "x": 0.0,
        "y": 0.0,
    }


def _identity(config: EngineConfig) -> dict[str, Any]:
    now = config.clock()
    return {
        "id": config.id_factory(),
        "name": config.default_shape_name,
        "created": now,
        "modified": now,
    }


def polygon_default_points(start: Point, size: float = 100.0) -> list[Point]:
    """Quadrilateral of width 2*size and height size anchored at ``start``."""
    return [
        Point(x=start.x, y=start.y),
        Point(x=start.x + 2 * size, y=start.y),
        Point(x=start.x + 2 * size, y=start.y + size),
        Point(x=start.x, y=start.y + size),
    ]


def create_quadratic_curve(point: Point, config: EngineConfig | None = None) -> QuadraticCurveShape:
    config = config or _DEFAULT_CONFIG
    return QuadraticCurveShape(
        **default_shape_styles(),
        **_identity(config),
        points=[point],
        control_points=[],
    )


def create_cubic_curve(point: Point, config: EngineConfig | None = None) -> CubicCurveShape:
    config = config or _DEFAULT_CONFIG
    return CubicCurveShape(
        **default_shape_styles(),
        **_identity(config),
        points=[point],
        control_points1=[],
        control_points2=[],
    )


def create_polygon(point: Point, config: EngineConfig | None = None) -> PolygonShape:
    config = config or _DEFAULT_CONFIG
    styles = default_shape_styles()
    styles.update(x=point.x, y=point.y)
    return PolygonShape(
        **styles,
        **_identity(config),
        points=polygon_default_points(point, config.polygon_default_size),
    )


_CONSTRUCTORS = {
    "qcurve": create_quadratic_curve,
    "bcurve": create_cubic_curve,
    "linepolygon": create_polygon,
}


def create_shape(shape_type: str, point: Point, config: EngineConfig | None = None) -> ShapeModel:
    """Create a new shape of ``shape_type`` anchored at ``point``.

    Raises UnknownShapeTypeError for anything but the three known variants.
    """
    constructor = _CONSTRUCTORS.get(shape_type)
    if constructor is None:
        raise UnknownShapeTypeError(shape_type)
    return constructor(point, config)


def is_shape_complete(shape: ShapeModel, epsilon: float = 1e-9) -> bool:
    """Curves are complete once closed; polygons always are."""
    if isinstance(shape, PolygonShape):
        return True
    return is_closed(shape.points, epsilon)

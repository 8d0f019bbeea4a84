"""Read-only views over CanvasState for the rendering layer."""

from __future__ import annotations

from shapecanvas.models.geometry import Bounds, Point
from shapecanvas.models.shapes import CubicCurveShape, QuadraticCurveShape, ShapeModel
from shapecanvas.models.state import CanvasState
from shapecanvas.utils.geometry import calculate_centroid, compute_bounds, is_closed


def all_shapes(state: CanvasState) -> list[ShapeModel]:
    """Committed shapes in paint order, back to front."""
    return list(state.shapes.values())


def selected_shape(state: CanvasState) -> ShapeModel | None:
    if state.selected_shape_id is None:
        return None
    return state.shapes.get(state.selected_shape_id)


def is_drawing(state: CanvasState) -> bool:
    return state.active_drawing_shape is not None


def shape_label_position(shape: ShapeModel) -> Point:
    """Where to draw the shape's name: the centroid of its anchors."""
    return calculate_centroid(shape.points, is_closed(shape.points))


def shape_bounds(shape: ShapeModel) -> Bounds:
    """Bounding box of anchors plus control points."""
    extra: list[Point] = []
    if isinstance(shape, QuadraticCurveShape):
        extra = shape.control_points
    elif isinstance(shape, CubicCurveShape):
        extra = [*shape.control_points1, *shape.control_points2]
    return compute_bounds(shape.points, extra)

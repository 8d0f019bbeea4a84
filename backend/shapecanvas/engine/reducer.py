"""Canvas reducer — the single transition function (state, action) -> state.

Every action kind has exactly one handler, registered with ``@handles``:

    @handles(DeleteShape)
    def _delete_shape(state: CanvasState, action: DeleteShape, config: EngineConfig) -> CanvasState:
        ...

Handlers never mutate their input. Paths that change the shape collection
build a new ``shapes`` dict, so callers can detect change by identity. A
referential miss (unknown shape id) or a boundary no-op returns the input
state object itself.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from shapecanvas.engine.config import EngineConfig
from shapecanvas.engine.factory import create_shape
from shapecanvas.errors import InvalidActionError
from shapecanvas.models.actions import (
    ACTION_TYPES,
    AddPoint,
    CancelDrawing,
    ChangeShapePos,
    ClearCanvas,
    CompleteShape,
    DeleteShape,
    DeselectShape,
    DuplicateShape,
    InsertPoint,
    SelectShape,
    SetDrawingMode,
    StartDrawing,
    TransformShape,
    UpdateMousePos,
    UpdateShape,
    parse_action,
)
from shapecanvas.models.geometry import Point
from shapecanvas.models.shapes import (
    CubicCurveShape,
    PolygonShape,
    QuadraticCurveShape,
    ShapeModel,
)
from shapecanvas.models.state import CanvasState
from shapecanvas.utils.geometry import (
    calculate_quadratic_control_points,
    insert_point,
    is_closed,
    should_snap_to_start,
    translate_points,
)

logger = logging.getLogger(__name__)

Handler = Callable[[CanvasState, Any, EngineConfig], CanvasState]

_HANDLERS: dict[type, Handler] = {}

INITIAL_STATE = CanvasState()

# Fields holding point lists, per variant
_POINT_FIELDS: dict[type, tuple[str, ...]] = {
    QuadraticCurveShape: ("points", "control_points"),
    CubicCurveShape: ("points", "control_points1", "control_points2"),
    PolygonShape: ("points",),
}


def handles(action_type: type) -> Callable[[Handler], Handler]:
    """Register the handler for one action kind."""

    def decorator(fn: Handler) -> Handler:
        if action_type in _HANDLERS:
            raise ValueError(f"Duplicate handler for {action_type.__name__}")
        _HANDLERS[action_type] = fn
        return fn

    return decorator


def reduce(state: CanvasState, action: Any, config: EngineConfig | None = None) -> CanvasState:
    """Apply one action to ``state`` and return the resulting state.

    ``action`` may be a typed action or an untyped payload dict; dicts are
    validated first and raise InvalidActionError if malformed.
    """
    config = config or EngineConfig()
    action = parse_action(action)
    handler = _HANDLERS[type(action)]
    new_state = handler(state, action, config)
    return _enforce_invariants(new_state)


def _enforce_invariants(state: CanvasState) -> CanvasState:
    selected = state.selected_shape_id
    if selected is not None and (
        state.active_drawing_shape is not None or selected not in state.shapes
    ):
        logger.debug("Dropping selection %s to keep state consistent", selected)
        return state.model_copy(update={"selected_shape_id": None})
    return state


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------


def _touch(shape: ShapeModel, config: EngineConfig) -> int:
    """Timestamp for a mutation: now, but never earlier than the last one."""
    return max(config.clock(), shape.modified)


def _with_points(shape: ShapeModel, points: list[Point], config: EngineConfig) -> ShapeModel:
    """Replace a drawing shape's anchors, keeping derived control points in sync."""
    update: dict[str, Any] = {"points": points, "modified": _touch(shape, config)}
    if isinstance(shape, QuadraticCurveShape):
        update["control_points"] = calculate_quadratic_control_points(points)
    elif isinstance(shape, CubicCurveShape):
        # No cubic derivation exists; the first control set follows the midpoint rule
        update["control_points1"] = calculate_quadratic_control_points(points)
    return shape.model_copy(update=update)


def _apply_changes(shape: ShapeModel, changes: dict[str, Any], config: EngineConfig) -> ShapeModel:
    """Merge ``changes`` into ``shape`` and re-validate the result.

    A quadratic curve whose ``points`` change gets its control points
    recomputed, overriding any control points in ``changes``. A cubic curve
    gets ``control_points1`` recomputed unless ``changes`` supplies it;
    ``control_points2`` is only ever set explicitly.
    """
    allowed = type(shape).model_fields
    unknown = sorted(name for name in changes if name not in allowed)
    if unknown:
        raise InvalidActionError(
            f"Fields {unknown} do not apply to a {shape.type} shape"
        )

    merged = dict(changes)
    points = merged.get("points")
    if points is not None:
        if isinstance(shape, QuadraticCurveShape):
            merged["control_points"] = calculate_quadratic_control_points(points)
        elif isinstance(shape, CubicCurveShape) and merged.get("control_points1") is None:
            merged["control_points1"] = calculate_quadratic_control_points(points)
    merged["modified"] = _touch(shape, config)

    data = shape.model_dump()
    data.update(merged)
    try:
        return type(shape).model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise InvalidActionError(f"Update leaves shape {shape.id} invalid: {e}", errors=errors) from e


def _replace_shape(state: CanvasState, shape: ShapeModel) -> CanvasState:
    shapes = dict(state.shapes)
    shapes[shape.id] = shape
    return state.model_copy(update={"shapes": shapes})


def _promote(state: CanvasState, shape: ShapeModel) -> CanvasState:
    """Move the drawing shape into the committed collection and select it."""
    shapes = dict(state.shapes)
    shapes[shape.id] = shape
    logger.info("Committed %s shape %s (%d points)", shape.type, shape.id, len(shape.points))
    return state.model_copy(
        update={
            "shapes": shapes,
            "active_drawing_shape": None,
            "selected_shape_id": shape.id,
        }
    )


def _lookup(state: CanvasState, shape_id: str, action_name: str) -> ShapeModel | None:
    shape = state.shapes.get(shape_id)
    if shape is None:
        logger.warning("%s: unknown shape %r, skipping", action_name, shape_id)
    return shape


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


@handles(StartDrawing)
def _start_drawing(state: CanvasState, action: StartDrawing, config: EngineConfig) -> CanvasState:
    if state.active_drawing_shape is not None:
        logger.debug("start_drawing ignored, already drawing %s", state.active_drawing_shape.id)
        return state
    if state.drawing_mode == "select":
        logger.debug("start_drawing ignored in select mode")
        return state

    shape = create_shape(action.shape_type, action.point, config)
    return state.model_copy(update={"active_drawing_shape": shape, "selected_shape_id": None})


@handles(AddPoint)
def _add_point(state: CanvasState, action: AddPoint, config: EngineConfig) -> CanvasState:
    shape = state.active_drawing_shape
    if shape is None or isinstance(shape, PolygonShape):
        return state

    points = shape.points
    if len(points) >= config.min_points_for_snap and should_snap_to_start(
        action.point, points[0], config.snap_distance
    ):
        closed = _with_points(shape, [*points, points[0]], config)
        return _promote(state, closed)

    updated = _with_points(shape, [*points, action.point], config)
    return state.model_copy(update={"active_drawing_shape": updated})


@handles(CompleteShape)
def _complete_shape(state: CanvasState, action: CompleteShape, config: EngineConfig) -> CanvasState:
    shape = state.active_drawing_shape
    if shape is None:
        return state
    if isinstance(shape, PolygonShape):
        return _promote(state, shape)
    if len(shape.points) >= 3:
        return _promote(state, shape.model_copy(update={"modified": _touch(shape, config)}))
    logger.debug("complete_shape ignored, %s has only %d points", shape.id, len(shape.points))
    return state


@handles(CancelDrawing)
def _cancel_drawing(state: CanvasState, action: CancelDrawing, config: EngineConfig) -> CanvasState:
    return state.model_copy(update={"active_drawing_shape": None})


# ---------------------------------------------------------------------------
# Shape management
# ---------------------------------------------------------------------------


@handles(ChangeShapePos)
def _change_shape_pos(state: CanvasState, action: ChangeShapePos, config: EngineConfig) -> CanvasState:
    if len(state.shapes) <= 1:
        return state

    order = list(state.shapes)
    if action.shape_id not in state.shapes:
        logger.warning("change_shape_pos: shape %r not found", action.shape_id)
        return state

    index = order.index(action.shape_id)
    if action.direction == "up":
        if index == 0:
            return state
        target = index - 1
    else:
        if index == len(order) - 1:
            return state
        target = index + 1

    order[index], order[target] = order[target], order[index]
    shapes = {shape_id: state.shapes[shape_id] for shape_id in order}
    return state.model_copy(update={"shapes": shapes})


@handles(SelectShape)
def _select_shape(state: CanvasState, action: SelectShape, config: EngineConfig) -> CanvasState:
    selected = action.shape_id if action.shape_id in state.shapes else None
    return state.model_copy(update={"selected_shape_id": selected, "active_drawing_shape": None})


@handles(DeselectShape)
def _deselect_shape(state: CanvasState, action: DeselectShape, config: EngineConfig) -> CanvasState:
    return state.model_copy(update={"selected_shape_id": None})


@handles(UpdateShape)
def _update_shape(state: CanvasState, action: UpdateShape, config: EngineConfig) -> CanvasState:
    shape = _lookup(state, action.shape_id, "update_shape")
    if shape is None:
        return state
    return _replace_shape(state, _apply_changes(shape, action.updates.changes(), config))


@handles(TransformShape)
def _transform_shape(state: CanvasState, action: TransformShape, config: EngineConfig) -> CanvasState:
    shape = _lookup(state, action.shape_id, "transform_shape")
    if shape is None:
        return state
    return _replace_shape(state, _apply_changes(shape, action.changes(), config))


@handles(InsertPoint)
def _insert_point(state: CanvasState, action: InsertPoint, config: EngineConfig) -> CanvasState:
    shape = _lookup(state, action.shape_id, "insert_point")
    if shape is None:
        return state

    if is_closed(shape.points, config.point_epsilon):
        # Plan on the open ring, then restore the closing point
        ring = insert_point(shape.points[:-1], action.point)
        points = [*ring, ring[0]]
    else:
        points = insert_point(shape.points, action.point)
    return _replace_shape(state, _apply_changes(shape, {"points": points}, config))


@handles(DeleteShape)
def _delete_shape(state: CanvasState, action: DeleteShape, config: EngineConfig) -> CanvasState:
    if action.shape_id not in state.shapes:
        logger.debug("delete_shape: unknown shape %r, skipping", action.shape_id)
        return state

    shapes = {k: v for k, v in state.shapes.items() if k != action.shape_id}
    selected = None if state.selected_shape_id == action.shape_id else state.selected_shape_id
    return state.model_copy(update={"shapes": shapes, "selected_shape_id": selected})


@handles(DuplicateShape)
def _duplicate_shape(state: CanvasState, action: DuplicateShape, config: EngineConfig) -> CanvasState:
    source = _lookup(state, action.shape_id, "duplicate_shape")
    if source is None:
        return state

    offset = config.duplicate_offset
    now = config.clock()
    update: dict[str, Any] = {
        "id": config.id_factory(),
        "created": now,
        "modified": now,
    }
    for name in _POINT_FIELDS[type(source)]:
        update[name] = translate_points(getattr(source, name), offset, offset)
    if source.name:
        update["name"] = f"{source.name} (copy)"
    clone = source.model_copy(update=update)

    shapes: dict[str, ShapeModel] = {}
    for shape_id, shape in state.shapes.items():
        shapes[shape_id] = shape
        if shape_id == source.id:
            shapes[clone.id] = clone
    return state.model_copy(
        update={
            "shapes": shapes,
            "selected_shape_id": clone.id,
            "active_drawing_shape": None,
        }
    )


# ---------------------------------------------------------------------------
# UI state
# ---------------------------------------------------------------------------


@handles(SetDrawingMode)
def _set_drawing_mode(state: CanvasState, action: SetDrawingMode, config: EngineConfig) -> CanvasState:
    return state.model_copy(
        update={
            "drawing_mode": action.mode,
            "active_drawing_shape": None,
            "selected_shape_id": state.selected_shape_id if action.mode == "select" else None,
        }
    )


@handles(UpdateMousePos)
def _update_mouse_pos(state: CanvasState, action: UpdateMousePos, config: EngineConfig) -> CanvasState:
    return state.model_copy(update={"current_mouse_pos": action.pos})


@handles(ClearCanvas)
def _clear_canvas(state: CanvasState, action: ClearCanvas, config: EngineConfig) -> CanvasState:
    logger.info("Clearing canvas (%d shapes)", len(state.shapes))
    return state.model_copy(
        update={
            "shapes": {},
            "selected_shape_id": None,
            "active_drawing_shape": None,
        }
    )


_missing = [t.__name__ for t in ACTION_TYPES if t not in _HANDLERS]
if _missing:
    raise RuntimeError(f"Canvas actions without a reducer handler: {_missing}")

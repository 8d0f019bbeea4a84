"""Canvas actions — one closed variant per user gesture.

Payloads arriving from outside (HTTP, replay logs) are validated here with
``parse_action`` before they reach the reducer.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from shapecanvas.errors import InvalidActionError
from shapecanvas.models.geometry import Coordinate, Point
from shapecanvas.models.shapes import Direction, DrawingMode, ShapePatch, ShapeType

ShapeId = Annotated[StrictStr, Field(min_length=1)]


class _Action(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# --- Drawing ---


class StartDrawing(_Action):
    type: Literal["start_drawing"] = "start_drawing"
    shape_type: ShapeType
    point: Point


class AddPoint(_Action):
    type: Literal["add_point"] = "add_point"
    point: Point


class CompleteShape(_Action):
    type: Literal["complete_shape"] = "complete_shape"


class CancelDrawing(_Action):
    type: Literal["cancel_drawing"] = "cancel_drawing"


# --- Shape management ---


class ChangeShapePos(_Action):
    type: Literal["change_shape_pos"] = "change_shape_pos"
    shape_id: ShapeId
    direction: Direction


class SelectShape(_Action):
    type: Literal["select_shape"] = "select_shape"
    shape_id: ShapeId


class DeselectShape(_Action):
    type: Literal["deselect_shape"] = "deselect_shape"


class UpdateShape(_Action):
    type: Literal["update_shape"] = "update_shape"
    shape_id: ShapeId
    updates: ShapePatch


class TransformShape(_Action):
    """Commit an already-transformed geometry computed by the renderer."""

    type: Literal["transform_shape"] = "transform_shape"
    shape_id: ShapeId
    points: list[Point] | None = None
    control_points: list[Point] | None = None
    control_points1: list[Point] | None = None
    control_points2: list[Point] | None = None
    x: Coordinate | None = None
    y: Coordinate | None = None
    rotation: Coordinate | None = None
    scale_x: Coordinate | None = None
    scale_y: Coordinate | None = None

    def changes(self) -> dict[str, object]:
        fields = self.model_fields_set - {"type", "shape_id"}
        return {name: getattr(self, name) for name in fields}


class InsertPoint(_Action):
    type: Literal["insert_point"] = "insert_point"
    shape_id: ShapeId
    point: Point


class DeleteShape(_Action):
    type: Literal["delete_shape"] = "delete_shape"
    shape_id: ShapeId


class DuplicateShape(_Action):
    type: Literal["duplicate_shape"] = "duplicate_shape"
    shape_id: ShapeId


# --- UI state ---


class SetDrawingMode(_Action):
    type: Literal["set_drawing_mode"] = "set_drawing_mode"
    mode: DrawingMode


class UpdateMousePos(_Action):
    type: Literal["update_mouse_pos"] = "update_mouse_pos"
    pos: Point | None = None


class ClearCanvas(_Action):
    type: Literal["clear_canvas"] = "clear_canvas"


CanvasAction = Annotated[
    Union[
        StartDrawing,
        AddPoint,
        CompleteShape,
        CancelDrawing,
        ChangeShapePos,
        SelectShape,
        DeselectShape,
        UpdateShape,
        TransformShape,
        InsertPoint,
        DeleteShape,
        DuplicateShape,
        SetDrawingMode,
        UpdateMousePos,
        ClearCanvas,
    ],
    Field(discriminator="type"),
]

ACTION_TYPES: tuple[type[_Action], ...] = (
    StartDrawing,
    AddPoint,
    CompleteShape,
    CancelDrawing,
    ChangeShapePos,
    SelectShape,
    DeselectShape,
    UpdateShape,
    TransformShape,
    InsertPoint,
    DeleteShape,
    DuplicateShape,
    SetDrawingMode,
    UpdateMousePos,
    ClearCanvas,
)

action_adapter: TypeAdapter[CanvasAction] = TypeAdapter(CanvasAction)


def parse_action(data: Any) -> CanvasAction:
    """Validate an untyped payload into a typed action.

    Raises InvalidActionError on anything malformed, including an unknown
    ``type`` discriminant.
    """
    if isinstance(data, ACTION_TYPES):
        return data
    try:
        return action_adapter.validate_python(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise InvalidActionError(f"Invalid canvas action: {e}", errors=errors) from e


# Action creators


def start_drawing(shape_type: ShapeType, point: Point) -> StartDrawing:
    return StartDrawing(shape_type=shape_type, point=point)


def add_point(point: Point) -> AddPoint:
    return AddPoint(point=point)


def complete_shape() -> CompleteShape:
    return CompleteShape()


def cancel_drawing() -> CancelDrawing:
    return CancelDrawing()


def change_shape_pos(shape_id: str, direction: Direction) -> ChangeShapePos:
    return ChangeShapePos(shape_id=shape_id, direction=direction)


def select_shape(shape_id: str) -> SelectShape:
    return SelectShape(shape_id=shape_id)


def deselect_shape() -> DeselectShape:
    return DeselectShape()


def update_shape(shape_id: str, **updates: Any) -> UpdateShape:
    return UpdateShape(shape_id=shape_id, updates=ShapePatch(**updates))


def transform_shape(shape_id: str, **fields: Any) -> TransformShape:
    return TransformShape(shape_id=shape_id, **fields)


def insert_point(shape_id: str, point: Point) -> InsertPoint:
    return InsertPoint(shape_id=shape_id, point=point)


def delete_shape(shape_id: str) -> DeleteShape:
    return DeleteShape(shape_id=shape_id)


def duplicate_shape(shape_id: str) -> DuplicateShape:
    return DuplicateShape(shape_id=shape_id)


def set_drawing_mode(mode: DrawingMode) -> SetDrawingMode:
    return SetDrawingMode(mode=mode)


def update_mouse_pos(pos: Point | None) -> UpdateMousePos:
    return UpdateMousePos(pos=pos)


def clear_canvas() -> ClearCanvas:
    return ClearCanvas()

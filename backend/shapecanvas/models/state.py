"""Canvas state — the value the reducer maps from and to."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from shapecanvas.models.geometry import Point
from shapecanvas.models.shapes import DrawingMode, ShapeModel


class CanvasState(BaseModel):
    """Immutable snapshot of the drawing canvas.

    ``shapes`` is ordered: iteration order is back-to-front paint order. The
    dict is never mutated once a state is built; transitions that change the
    collection build a new dict.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    shapes: dict[str, ShapeModel] = Field(default_factory=dict)
    selected_shape_id: str | None = None
    active_drawing_shape: ShapeModel | None = None
    drawing_mode: DrawingMode = "select"
    current_mouse_pos: Point | None = None

    @model_validator(mode="after")
    def _check_references(self) -> CanvasState:
        for key, shape in self.shapes.items():
            if key != shape.id:
                raise ValueError(f"shape keyed as {key!r} has id {shape.id!r}")
        if self.selected_shape_id is not None and self.selected_shape_id not in self.shapes:
            raise ValueError(f"selected shape {self.selected_shape_id!r} does not exist")
        if self.active_drawing_shape is not None and self.selected_shape_id is not None:
            raise ValueError("a shape cannot be selected while another is being drawn")
        return self

    @property
    def is_drawing(self) -> bool:
        return self.active_drawing_shape is not None

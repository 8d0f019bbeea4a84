"""Shape records — a closed tagged union over the three drawable variants.

JSON uses camelCase keys (``controlPoints``, ``scaleX``, ``strokeWidth``) while
Python code uses the snake_case attribute names. All models are frozen: every
edit produces a new record.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
    model_validator,
)
from pydantic.alias_generators import to_camel

from shapecanvas.models.geometry import Coordinate, Point

ShapeType = Literal["qcurve", "bcurve", "linepolygon"]
DrawingMode = Literal["select", "qcurve", "bcurve", "linepolygon"]
Direction = Literal["up", "down"]

SHAPE_TYPES: tuple[str, ...] = ("qcurve", "bcurve", "linepolygon")
CURVE_TYPES: tuple[str, ...] = ("qcurve", "bcurve")

Timestamp = Annotated[StrictInt, Field(gt=0)]


class BaseShape(BaseModel):
    """Fields common to every shape variant."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: Annotated[StrictStr, Field(min_length=1)]
    x: Coordinate = 0.0
    y: Coordinate = 0.0
    rotation: Coordinate = 0.0
    scale_x: Coordinate = 1.0
    scale_y: Coordinate = 1.0
    visible: StrictBool = True
    opacity: Annotated[float, Field(strict=True, ge=0.0, le=1.0, allow_inf_nan=False)] = 1.0
    fill: StrictStr = "lightblue"
    stroke: StrictStr = "blue"
    stroke_width: Annotated[float, Field(strict=True, ge=0.0, allow_inf_nan=False)] = 2.0
    name: StrictStr | None = None
    created: Timestamp
    modified: Timestamp

    @model_validator(mode="after")
    def _modified_not_before_created(self) -> BaseShape:
        if self.modified < self.created:
            raise ValueError(
                f"modified ({self.modified}) is earlier than created ({self.created})"
            )
        return self


class QuadraticCurveShape(BaseShape):
    """Curved outline; one midpoint control point per segment."""

    type: Literal["qcurve"] = "qcurve"
    points: Annotated[list[Point], Field(min_length=1)]
    control_points: list[Point] = Field(default_factory=list)


class CubicCurveShape(BaseShape):
    """Cubic outline with two control points per segment.

    Only the data shape is defined; there is no cubic control-point derivation.
    """

    type: Literal["bcurve"] = "bcurve"
    points: Annotated[list[Point], Field(min_length=1)]
    control_points1: list[Point] = Field(default_factory=list)
    control_points2: list[Point] = Field(default_factory=list)


class PolygonShape(BaseShape):
    """Straight-edged outline, complete from the moment it is created."""

    type: Literal["linepolygon"] = "linepolygon"
    points: Annotated[list[Point], Field(min_length=3)]


ShapeModel = Annotated[
    Union[QuadraticCurveShape, CubicCurveShape, PolygonShape],
    Field(discriminator="type"),
]

SHAPE_CLASSES: dict[str, type[BaseShape]] = {
    "qcurve": QuadraticCurveShape,
    "bcurve": CubicCurveShape,
    "linepolygon": PolygonShape,
}

shape_adapter: TypeAdapter[ShapeModel] = TypeAdapter(ShapeModel)
shape_list_adapter: TypeAdapter[list[ShapeModel]] = TypeAdapter(list[ShapeModel])


class ShapePatch(BaseModel):
    """Partial update for a committed shape.

    Identity and bookkeeping fields (``id``, ``type``, ``created``, ``modified``)
    are not patchable. Only explicitly supplied fields are applied.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    x: Coordinate | None = None
    y: Coordinate | None = None
    rotation: Coordinate | None = None
    scale_x: Coordinate | None = None
    scale_y: Coordinate | None = None
    visible: StrictBool | None = None
    opacity: Annotated[float, Field(strict=True, ge=0.0, le=1.0, allow_inf_nan=False)] | None = None
    fill: StrictStr | None = None
    stroke: StrictStr | None = None
    stroke_width: Annotated[float, Field(strict=True, ge=0.0, allow_inf_nan=False)] | None = None
    name: StrictStr | None = None
    points: list[Point] | None = None
    control_points: list[Point] | None = None
    control_points1: list[Point] | None = None
    control_points2: list[Point] | None = None

    def changes(self) -> dict[str, object]:
        """The explicitly supplied fields, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}

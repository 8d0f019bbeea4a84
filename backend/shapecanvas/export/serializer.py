"""Flat JSON export/import of the shape collection.

The format is a JSON array of shape records in paint order, with camelCase
keys. Both directions validate: malformed records raise ShapeValidationError
instead of being repaired.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from shapecanvas.errors import ShapeValidationError
from shapecanvas.models.shapes import ShapeModel, shape_list_adapter
from shapecanvas.models.state import CanvasState

logger = logging.getLogger(__name__)


def _validation_error(prefix: str, e: ValidationError) -> ShapeValidationError:
    errors = e.errors(include_url=False, include_context=False, include_input=False)
    return ShapeValidationError(f"{prefix}: {e}", errors=errors)


def shapes_to_data(shapes: Iterable[ShapeModel]) -> list[dict[str, Any]]:
    """Validated, JSON-ready dicts for ``shapes``."""
    data = shape_list_adapter.dump_python(list(shapes), mode="json", by_alias=True, exclude_none=True)
    try:
        shape_list_adapter.validate_python(data)
    except ValidationError as e:
        raise _validation_error("Refusing to export invalid shapes", e) from e
    return data


def export_shapes(source: CanvasState | Iterable[ShapeModel], indent: int | None = 2) -> str:
    """Serialize committed shapes (or any shape sequence) to a JSON array."""
    shapes = source.shapes.values() if isinstance(source, CanvasState) else source
    return json.dumps(shapes_to_data(shapes), indent=indent)


def import_shapes(raw: str | bytes | list[Any]) -> list[ShapeModel]:
    """Parse and validate a JSON array (text or already-decoded list) of shapes."""
    try:
        if isinstance(raw, (str, bytes)):
            shapes = shape_list_adapter.validate_json(raw)
        else:
            shapes = shape_list_adapter.validate_python(raw)
    except ValidationError as e:
        raise _validation_error("Invalid shape data", e) from e

    seen: set[str] = set()
    for shape in shapes:
        if shape.id in seen:
            raise ShapeValidationError(f"Duplicate shape id: {shape.id}")
        seen.add(shape.id)
    logger.debug("Imported %d shapes", len(shapes))
    return shapes


def load_shapes(state: CanvasState, shapes: Iterable[ShapeModel], replace: bool = True) -> CanvasState:
    """A new state holding ``shapes``, either replacing or appended after the existing ones.

    Any drawing in progress and the selection are dropped.
    """
    merged: dict[str, ShapeModel] = {} if replace else dict(state.shapes)
    for shape in shapes:
        if shape.id in merged:
            raise ShapeValidationError(f"Duplicate shape id: {shape.id}")
        merged[shape.id] = shape
    return state.model_copy(
        update={
            "shapes": merged,
            "selected_shape_id": None,
            "active_drawing_shape": None,
        }
    )

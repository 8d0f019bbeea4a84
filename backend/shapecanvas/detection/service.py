"""Outline detection collaborator.

``detect_shape`` stands in for the external detection API: given a seed
coordinate it returns an outline after a short delay. The detected outline
enters the canvas through the ordinary actions, like any polygon.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Sequence

from shapecanvas.config import settings
from shapecanvas.engine.config import EngineConfig
from shapecanvas.engine.reducer import reduce
from shapecanvas.models.actions import (
    CompleteShape,
    SelectShape,
    SetDrawingMode,
    StartDrawing,
    UpdateShape,
)
from shapecanvas.models.geometry import Point
from shapecanvas.models.shapes import ShapePatch
from shapecanvas.models.state import CanvasState

logger = logging.getLogger(__name__)


async def detect_shape(
    x: float,
    y: float,
    size: float | None = None,
    delay: float | None = None,
) -> list[Point]:
    """Detect the outline around ``(x, y)``.

    Mock implementation: a square of side ``size`` centred on the seed.
    """
    size = settings.detection_outline_size if size is None else size
    if delay is None:
        delay = random.uniform(settings.detection_delay_min, settings.detection_delay_max)
    if delay > 0:
        await asyncio.sleep(delay)

    half = size / 2
    outline = [
        Point(x=x - half, y=y - half),
        Point(x=x + half, y=y - half),
        Point(x=x + half, y=y + half),
        Point(x=x - half, y=y + half),
    ]
    logger.debug("Detected %d-point outline at (%s, %s)", len(outline), x, y)
    return outline


def add_detected_shape(
    state: CanvasState,
    points: Sequence[Point],
    config: EngineConfig | None = None,
) -> CanvasState:
    """Add a detected outline as a new, selected polygon.

    Goes through StartDrawing / CompleteShape / UpdateShape so the usual
    validation applies (fewer than three points raises InvalidActionError).
    The previous drawing mode is restored afterwards. While a shape is being
    drawn the outline is refused and the state returned unchanged.
    """
    config = config or EngineConfig.from_settings()
    if not points:
        return state
    if state.active_drawing_shape is not None:
        logger.warning(
            "Ignoring detected outline while %s is being drawn", state.active_drawing_shape.id
        )
        return state

    previous_mode = state.drawing_mode
    state = reduce(state, SetDrawingMode(mode="linepolygon"), config)
    state = reduce(state, StartDrawing(shape_type="linepolygon", point=points[0]), config)
    state = reduce(state, CompleteShape(), config)
    shape_id = state.selected_shape_id
    state = reduce(
        state,
        UpdateShape(shape_id=shape_id, updates=ShapePatch(points=list(points))),
        config,
    )
    if previous_mode != state.drawing_mode:
        state = reduce(state, SetDrawingMode(mode=previous_mode), config)
        state = reduce(state, SelectShape(shape_id=shape_id), config)
    return state

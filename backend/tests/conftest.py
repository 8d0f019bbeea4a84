"""Shared test fixtures."""

from __future__ import annotations

import itertools

import pytest

from shapecanvas.engine.config import EngineConfig
from shapecanvas.engine.reducer import INITIAL_STATE, reduce
from shapecanvas.models.actions import AddPoint, SetDrawingMode, StartDrawing
from shapecanvas.models.geometry import Point
from shapecanvas.models.state import CanvasState

T0 = 1_700_000_000_000


def P(x: float, y: float) -> Point:
    return Point(x=x, y=y)


def pts(*coords: tuple[float, float]) -> list[Point]:
    return [Point(x=x, y=y) for x, y in coords]


def make_config(**overrides) -> EngineConfig:
    """Engine config with a ticking millisecond clock and sequential ids."""
    ticks = itertools.count(T0)
    ids = itertools.count(1)
    return EngineConfig(
        clock=lambda: next(ticks),
        id_factory=lambda: f"shape_{next(ids)}",
        **overrides,
    )


def draw_qcurve(
    state: CanvasState,
    config: EngineConfig,
    points: list[tuple[float, float]],
) -> CanvasState:
    """Enter qcurve mode and feed ``points`` as pointer clicks."""
    state = reduce(state, SetDrawingMode(mode="qcurve"), config)
    first, *rest = points
    state = reduce(state, StartDrawing(shape_type="qcurve", point=P(*first)), config)
    for x, y in rest:
        state = reduce(state, AddPoint(point=P(x, y)), config)
    return state


# Triangle drawn and closed by a click near the start
TRIANGLE_CLICKS = [(0, 0), (100, 0), (100, 100), (5, 5)]


@pytest.fixture
def config() -> EngineConfig:
    return make_config()


@pytest.fixture
def empty_state() -> CanvasState:
    return INITIAL_STATE


@pytest.fixture
def closed_curve_state(config: EngineConfig) -> CanvasState:
    """One committed, closed quadratic curve (shape_1), selected."""
    return draw_qcurve(INITIAL_STATE, config, TRIANGLE_CLICKS)


@pytest.fixture
def three_shapes_state(config: EngineConfig) -> CanvasState:
    """Three committed polygons shape_1, shape_2, shape_3 in that order."""
    state = reduce(INITIAL_STATE, SetDrawingMode(mode="linepolygon"), config)
    for i in range(3):
        state = reduce(state, StartDrawing(shape_type="linepolygon", point=P(i * 300, 0)), config)
        state = reduce(state, {"type": "complete_shape"}, config)
    return state

"""Tests for sessions, the session store, selectors and legacy migration."""

from __future__ import annotations

import pytest

from shapecanvas.engine import selectors
from shapecanvas.engine.migration import (
    MIGRATED_SHAPE_NAME,
    can_migrate_legacy_state,
    migrate_legacy_shape,
)
from shapecanvas.engine.reducer import INITIAL_STATE
from shapecanvas.engine.session import CanvasSession, SessionStore, get_session_store
from shapecanvas.errors import InvalidActionError, SessionNotFoundError
from shapecanvas.models import actions
from shapecanvas.models.geometry import Bounds
from tests.conftest import TRIANGLE_CLICKS, P, pts


class TestCanvasSession:
    def test_dispatch_advances_state(self, config):
        session = CanvasSession(config=config)
        session.dispatch(actions.set_drawing_mode("qcurve"))
        first, *rest = TRIANGLE_CLICKS
        session.dispatch(actions.start_drawing("qcurve", P(*first)))
        assert session.is_drawing
        for x, y in rest:
            session.dispatch(actions.add_point(P(x, y)))

        assert not session.is_drawing
        assert session.actions_applied == 5
        assert [s.id for s in session.all_shapes] == ["shape_1"]
        assert session.selected_shape.id == "shape_1"

    def test_dispatch_accepts_payloads(self, config):
        session = CanvasSession(config=config)
        state = session.dispatch({"type": "set_drawing_mode", "mode": "linepolygon"})
        assert state.drawing_mode == "linepolygon"
        assert session.state is state

    def test_invalid_action_leaves_state(self, config):
        session = CanvasSession(config=config)
        with pytest.raises(InvalidActionError):
            session.dispatch({"type": "fly_away"})
        assert session.state is INITIAL_STATE
        assert session.actions_applied == 0

    def test_replace_state(self, config, three_shapes_state):
        session = CanvasSession(config=config)
        session.replace_state(three_shapes_state)
        assert len(session.all_shapes) == 3


class TestSessionStore:
    def test_create_get_delete(self):
        store = SessionStore()
        session = store.create()
        assert store.get(session.id) is session
        assert store.count == 1
        store.delete(session.id)
        assert store.count == 0

    def test_unknown_session(self):
        store = SessionStore()
        with pytest.raises(SessionNotFoundError) as exc_info:
            store.get("missing")
        assert exc_info.value.session_id == "missing"
        with pytest.raises(SessionNotFoundError):
            store.delete("missing")

    def test_sessions_are_independent(self):
        store = SessionStore()
        a, b = store.create(), store.create()
        a.dispatch(actions.set_drawing_mode("bcurve"))
        assert a.id != b.id
        assert b.state.drawing_mode == "select"

    def test_singleton(self):
        assert get_session_store() is get_session_store()


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class TestSelectors:
    def test_all_shapes_in_paint_order(self, three_shapes_state):
        assert [s.id for s in selectors.all_shapes(three_shapes_state)] == [
            "shape_1",
            "shape_2",
            "shape_3",
        ]

    def test_selected_shape(self, three_shapes_state):
        assert selectors.selected_shape(three_shapes_state).id == "shape_3"
        assert selectors.selected_shape(INITIAL_STATE) is None

    def test_is_drawing(self, closed_curve_state):
        assert not selectors.is_drawing(closed_curve_state)

    def test_label_position_closed_curve(self, closed_curve_state):
        label = selectors.shape_label_position(closed_curve_state.shapes["shape_1"])
        assert label.x == pytest.approx(200 / 3)
        assert label.y == pytest.approx(100 / 3)

    def test_label_position_polygon(self, three_shapes_state):
        label = selectors.shape_label_position(three_shapes_state.shapes["shape_1"])
        assert (label.x, label.y) == (pytest.approx(100), pytest.approx(50))

    def test_bounds_include_control_points(self, closed_curve_state):
        bounds = selectors.shape_bounds(closed_curve_state.shapes["shape_1"])
        assert bounds == Bounds(x=0, y=0, width=100, height=100)

    def test_polygon_bounds(self, three_shapes_state):
        bounds = selectors.shape_bounds(three_shapes_state.shapes["shape_2"])
        assert bounds == Bounds(x=300, y=0, width=200, height=100)


# ---------------------------------------------------------------------------
# Legacy migration
# ---------------------------------------------------------------------------


class TestMigration:
    LEGACY_POINTS = pts((0, 0), (10, 0), (10, 10), (0, 0))

    def test_can_migrate(self):
        assert can_migrate_legacy_state(self.LEGACY_POINTS, True)
        assert not can_migrate_legacy_state(self.LEGACY_POINTS, False)
        assert not can_migrate_legacy_state(pts((0, 0), (1, 1)), True)

    def test_derives_missing_control_points(self, config):
        shape = migrate_legacy_shape(self.LEGACY_POINTS, rotation=15, config=config)
        assert shape.name == MIGRATED_SHAPE_NAME
        assert shape.rotation == 15
        assert shape.points == self.LEGACY_POINTS
        assert shape.control_points == pts((5, 0), (10, 5), (5, 5))
        assert shape.id == "shape_1"

    def test_keeps_supplied_control_points(self, config):
        legacy_cps = pts((5, -3), (13, 5), (5, 8))
        shape = migrate_legacy_shape(self.LEGACY_POINTS, legacy_cps, config=config)
        assert shape.control_points == legacy_cps

    def test_nothing_to_migrate(self, config):
        assert migrate_legacy_shape([], config=config) is None

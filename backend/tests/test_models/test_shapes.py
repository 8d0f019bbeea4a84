"""Tests for shape, state and action validation."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from shapecanvas.errors import InvalidActionError
from shapecanvas.models.actions import (
    AddPoint,
    ChangeShapePos,
    StartDrawing,
    TransformShape,
    UpdateShape,
    parse_action,
)
from shapecanvas.models.shapes import (
    PolygonShape,
    QuadraticCurveShape,
    ShapePatch,
    shape_adapter,
)
from shapecanvas.models.state import CanvasState
from tests.conftest import T0, P


def _qcurve_data(**overrides) -> dict:
    data = {
        "id": "shape_abc123",
        "type": "qcurve",
        "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}, {"x": 0, "y": 0}],
        "controlPoints": [{"x": 50, "y": 0}, {"x": 100, "y": 50}, {"x": 50, "y": 50}],
        "x": 0, "y": 0, "rotation": 0, "scaleX": 1, "scaleY": 1,
        "visible": True, "opacity": 1, "fill": "lightblue", "stroke": "blue", "strokeWidth": 2,
        "name": "Opportunity name", "created": T0, "modified": T0,
    }
    data.update(overrides)
    return data


class TestShapeValidation:
    def test_valid_qcurve(self):
        shape = shape_adapter.validate_python(_qcurve_data())
        assert isinstance(shape, QuadraticCurveShape)
        assert shape.control_points[1] == P(100, 50)
        assert shape.scale_x == 1

    def test_polygon_needs_three_points(self):
        data = _qcurve_data(type="linepolygon", points=[{"x": 0, "y": 0}, {"x": 1, "y": 1}])
        del data["controlPoints"]
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(data)

    def test_polygon(self):
        data = _qcurve_data(type="linepolygon")
        del data["controlPoints"]
        assert isinstance(shape_adapter.validate_python(data), PolygonShape)

    def test_curve_needs_a_point(self):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(points=[], controlPoints=[]))

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(type="rectangle"))

    @pytest.mark.parametrize("opacity", [-0.1, 1.5])
    def test_opacity_range(self, opacity):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(opacity=opacity))

    def test_negative_stroke_width(self):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(strokeWidth=-1))

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(rotation=value))
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(points=[{"x": value, "y": 0}]))

    def test_no_silent_coercion(self):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(x="10"))
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(visible=1))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(skewX=3))

    def test_modified_before_created(self):
        with pytest.raises(ValidationError):
            shape_adapter.validate_python(_qcurve_data(modified=T0 - 1))

    def test_shapes_are_frozen(self):
        shape = shape_adapter.validate_python(_qcurve_data())
        with pytest.raises(ValidationError):
            shape.fill = "red"


class TestCanvasState:
    def test_defaults(self):
        state = CanvasState()
        assert state.shapes == {}
        assert state.drawing_mode == "select"
        assert not state.is_drawing

    def test_selection_must_exist(self):
        with pytest.raises(ValidationError):
            CanvasState(selected_shape_id="shape_missing")

    def test_selection_and_drawing_exclusive(self):
        shape = shape_adapter.validate_python(_qcurve_data())
        with pytest.raises(ValidationError):
            CanvasState(
                shapes={shape.id: shape},
                selected_shape_id=shape.id,
                active_drawing_shape=shape,
            )


class TestActionParsing:
    def test_parse_camel_case_payload(self):
        action = parse_action({"type": "start_drawing", "shapeType": "qcurve", "point": {"x": 1, "y": 2}})
        assert isinstance(action, StartDrawing)
        assert action.point == P(1, 2)

    def test_typed_action_passes_through(self):
        action = AddPoint(point=P(1, 1))
        assert parse_action(action) is action

    def test_unknown_action_type(self):
        with pytest.raises(InvalidActionError):
            parse_action({"type": "rotate_everything"})

    def test_unknown_shape_type(self):
        with pytest.raises(InvalidActionError):
            parse_action({"type": "start_drawing", "shapeType": "rectangle", "point": {"x": 0, "y": 0}})

    def test_bad_direction(self):
        with pytest.raises(InvalidActionError):
            parse_action({"type": "change_shape_pos", "shapeId": "shape_1", "direction": "left"})

    def test_missing_payload(self):
        with pytest.raises(InvalidActionError) as exc:
            parse_action({"type": "add_point"})
        assert exc.value.errors

    def test_change_shape_pos(self):
        action = parse_action({"type": "change_shape_pos", "shapeId": "shape_1", "direction": "up"})
        assert action == ChangeShapePos(shape_id="shape_1", direction="up")

    def test_update_shape_patch_tracks_supplied_fields(self):
        action = parse_action({
            "type": "update_shape",
            "shapeId": "shape_1",
            "updates": {"fill": "red", "strokeWidth": 4},
        })
        assert isinstance(action, UpdateShape)
        assert action.updates.changes() == {"fill": "red", "stroke_width": 4}

    def test_update_shape_rejects_identity_fields(self):
        with pytest.raises(InvalidActionError):
            parse_action({"type": "update_shape", "shapeId": "shape_1", "updates": {"id": "other"}})

    def test_transform_changes(self):
        action = TransformShape(shape_id="shape_1", rotation=45, points=[P(0, 0)])
        assert set(action.changes()) == {"rotation", "points"}

    def test_patch_explicit_none_name(self):
        assert ShapePatch(name=None).changes() == {"name": None}

"""
Tests for the pointer editing state machine.

Canvas is 600x300 with 11px handles, so the default curve's handles sit at
x = 0, 199.8, 400.2 and 600 on the midline y = 150.
"""
import pytest

from coordinate_mapper import CoordinateMapper
from curve_model import ControlPoint, CurveModel
from edit_session import EditSession, HitTarget, PointerEvent, point_geometry
from enums import EditAction, EditState, GestureKind


def test_point_geometry(flat_curve, mapper):
    targets = point_geometry(flat_curve, mapper, 11)
    assert [t.point for t in targets] == list(flat_curve.points)
    assert targets[1].screen_x == pytest.approx(199.8)
    assert targets[1].screen_y == 150
    assert targets[1].radius == 11


class TestHitTest:
    def test_hit_inside_radius(self, edit_session, flat_curve):
        hit = edit_session.hit_test(205, 155)
        assert hit.point is flat_curve.points[1]

    def test_miss(self, edit_session):
        assert edit_session.hit_test(300, 150) is None
        assert edit_session.hit_test(199.8, 170) is None

    def test_overlapping_handles_resolve_to_first_listed(self, flat_curve, mapper):
        a = ControlPoint(0.5, 0.0)
        b = ControlPoint(0.51, 0.0)
        targets = [HitTarget(300, 150, 11, a), HitTarget(306, 150, 11, b)]
        session = EditSession(flat_curve, mapper, lambda: targets)
        assert session.hit_test(303, 150).point is a

        session.geometry_provider = lambda: list(reversed(targets))
        assert session.hit_test(303, 150).point is b


class TestDrag:
    def test_down_on_handle_starts_drag(self, edit_session, flat_curve):
        action = edit_session.pointer_down(202, 148)
        assert action == EditAction.DRAG_STARTED
        assert edit_session.state == EditState.DRAGGING
        assert edit_session.target is flat_curve.points[1]
        assert edit_session.drag.grab_offset == pytest.approx((2.2, -2))
        assert len(flat_curve) == 4

    def test_move_keeps_grab_offset(self, edit_session, flat_curve):
        point = flat_curve.points[1]
        edit_session.pointer_down(202, 148)
        action = edit_session.pointer_move(152, 73)
        assert action == EditAction.MOVED
        # Handle centre follows the pointer minus the offset: (149.8, 75)
        assert point.x == pytest.approx(149.8 / 600)
        assert point.y == pytest.approx(-0.5)

    def test_move_cannot_cross_neighbour(self, edit_session, flat_curve):
        point = flat_curve.points[1]
        edit_session.pointer_down(199.8, 150)
        edit_session.pointer_move(590, 150)
        assert point.x == pytest.approx(0.667 - flat_curve.min_gap)
        assert flat_curve.index_of(point) == 1

    def test_up_releases(self, edit_session):
        edit_session.pointer_down(199.8, 150)
        assert edit_session.pointer_up() == EditAction.RELEASED
        assert edit_session.state == EditState.IDLE
        assert edit_session.target is None

    def test_up_while_idle(self, edit_session):
        assert edit_session.pointer_up() == EditAction.NONE

    def test_drag_endpoint_trims(self, edit_session, flat_curve):
        edit_session.pointer_down(0, 150)
        edit_session.pointer_move(60, 150)
        edit_session.pointer_up()
        assert flat_curve.active_window[0] == pytest.approx(0.1)
        assert flat_curve.is_trimmed


class TestInsert:
    def test_down_on_empty_space_inserts(self, edit_session, flat_curve):
        action = edit_session.pointer_down(300, 75)
        assert action == EditAction.INSERTED
        assert len(flat_curve) == 5
        inserted = flat_curve.points[2]
        assert inserted.x == pytest.approx(0.5)
        assert inserted.y == pytest.approx(-0.5)
        assert edit_session.state == EditState.IDLE

    def test_insert_outside_canvas_is_ignored(self, edit_session, flat_curve):
        assert edit_session.pointer_down(650, 150) == EditAction.NONE
        assert len(flat_curve) == 4

    def test_insert_outside_trim_window_is_ignored(self, edit_session, flat_curve):
        flat_curve.move_point(flat_curve.first, 0.2, 0)
        assert edit_session.pointer_down(60, 150) == EditAction.NONE
        assert len(flat_curve) == 4

    def test_inserted_point_can_be_grabbed(self, edit_session, flat_curve):
        edit_session.pointer_down(300, 75)
        edit_session.pointer_up()
        assert edit_session.pointer_down(300, 75) == EditAction.DRAG_STARTED
        assert edit_session.target is flat_curve.points[2]


class TestRemove:
    def test_remove_interior(self, edit_session, flat_curve):
        interior = flat_curve.points[2]
        assert edit_session.remove_gesture(400, 150) == EditAction.REMOVED
        assert flat_curve.index_of(interior) is None

    def test_remove_endpoint_is_ignored(self, edit_session, flat_curve):
        assert edit_session.remove_gesture(0, 150) == EditAction.NONE
        assert edit_session.remove_gesture(600, 150) == EditAction.NONE
        assert len(flat_curve) == 4

    def test_remove_miss(self, edit_session, flat_curve):
        assert edit_session.remove_gesture(300, 150) == EditAction.NONE
        assert len(flat_curve) == 4

    def test_remove_dragged_point_ends_drag(self, edit_session):
        edit_session.pointer_down(199.8, 150)
        assert edit_session.remove_gesture(199.8, 150) == EditAction.REMOVED
        assert edit_session.state == EditState.IDLE
        assert edit_session.pointer_move(250, 100) == EditAction.NONE


class TestHover:
    def test_move_sets_ghost_and_hover(self, edit_session):
        edit_session.pointer_move(300, 100)
        assert edit_session.ghost == (300, 100)
        assert not edit_session.hovering

        edit_session.pointer_move(400, 152)
        assert edit_session.hovering


def test_handle_dispatch(edit_session, flat_curve):
    assert edit_session.handle(PointerEvent(GestureKind.DOWN, 199.8, 150)) == EditAction.DRAG_STARTED
    assert edit_session.handle(PointerEvent(GestureKind.MOVE, 150, 150)) == EditAction.MOVED
    assert edit_session.handle(PointerEvent(GestureKind.UP)) == EditAction.RELEASED
    assert edit_session.handle(PointerEvent(GestureKind.REMOVE, 150, 150)) == EditAction.REMOVED
    assert len(flat_curve) == 3


def test_geometry_is_read_at_gesture_time():
    model = CurveModel()
    mapper = CoordinateMapper(600, 300)
    drawn = []
    session = EditSession(model, mapper, lambda: drawn)

    # Nothing drawn yet: down on the first point grabs nothing and x=0 cannot be inserted
    assert session.pointer_down(0, 150) == EditAction.NONE

    drawn.extend(point_geometry(model, mapper, 11))
    assert session.pointer_down(0, 150) == EditAction.DRAG_STARTED

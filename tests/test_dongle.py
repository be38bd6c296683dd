"""Tests for endpoint resolution, avoidance boxes and dongles."""

import logging

import pytest

from elbow_router.layout.geometry import DOWN, LEFT, RIGHT, UP, bounds_overlap
from elbow_router.layout.routing.dongle import (
    adjust_avoidance_box,
    build_dongle,
    extend_to_box_edge,
    resolve_endpoints,
)
from elbow_router.parser.model import (
    ArrowElement,
    BindableElement,
    Binding,
    ElementType,
    Scene,
)


def _rect(id, x, y, w=100, h=100, **kwargs):
    return BindableElement(
        id=id, type=ElementType.RECTANGLE, x=x, y=y, width=w, height=h, **kwargs
    )


def _arrow(start, end, start_id=None, end_id=None, **kwargs):
    return ArrowElement(
        id="arrow",
        x=start[0],
        y=start[1],
        points=((0, 0), (end[0] - start[0], end[1] - start[1])),
        start_binding=Binding(start_id) if start_id else None,
        end_binding=Binding(end_id) if end_id else None,
        **kwargs,
    )


def _resolve(scene, arrow):
    start = (arrow.x, arrow.y)
    end = (arrow.x + arrow.points[-1][0], arrow.y + arrow.points[-1][1])
    return resolve_endpoints(arrow, scene, start, end)


def _padded(box):
    return (box[0] - 50, box[1] - 50, box[2] + 50, box[3] + 50)


def _adjusted_pair(a, b, a_clearance=10, b_clearance=30):
    return (
        adjust_avoidance_box(_padded(a), a, b, a_clearance, b_clearance),
        adjust_avoidance_box(_padded(b), b, a, b_clearance, a_clearance),
    )


class TestAdjustAvoidanceBox:
    def test_side_by_side_meet_at_midline(self):
        a = (0, 0, 100, 100)
        b = (300, 0, 400, 100)
        assert _adjusted_pair(a, b) == ((-50, -50, 199, 150), (201, -50, 450, 150))

    def test_stacked(self):
        a = (0, 0, 100, 100)
        b = (0, 200, 100, 300)
        assert _adjusted_pair(a, b) == ((-50, -50, 150, 149), (-50, 151, 150, 350))

    def test_tight_gap_meets_at_midline(self):
        a = (0, 0, 100, 100)
        b = (110, 0, 210, 100)
        assert _adjusted_pair(a, b) == ((-50, -50, 104, 150), (106, -50, 260, 150))

    def test_arrowhead_side_keeps_clearance(self):
        a = (0, 0, 100, 100)
        b = (150, 0, 250, 100)
        a_box, b_box = _adjusted_pair(a, b)
        assert a_box[2] == 119
        assert b_box[0] == 121

    def test_sides_never_cut_into_their_element(self):
        a = (0, 0, 100, 100)
        b = (101, 0, 201, 100)
        a_box, b_box = _adjusted_pair(a, b)
        assert a_box[2] == 100
        assert b_box[0] == 101

    def test_diagonal_keeps_further_side(self):
        a = (0, 0, 100, 100)
        near = (150, 300, 250, 400)
        far = (300, 300, 400, 400)
        assert adjust_avoidance_box(_padded(a), a, near, 10)[2] == 150
        assert adjust_avoidance_box(_padded(a), a, far, 10) == (-50, -50, 199, 199)

    def test_overlapping_elements_are_left_alone(self):
        a = (0, 0, 100, 100)
        assert adjust_avoidance_box(_padded(a), a, (50, 50, 150, 150), 10) == _padded(a)

    @pytest.mark.parametrize(
        "b",
        [
            (101, 0, 201, 100),
            (110, 0, 210, 100),
            (139, 0, 239, 100),
            (150, 0, 250, 100),
            (-153, -19, -53, 81),
            (70, -133, 170, -33),
            (0, 120, 100, 220),
            (130, 130, 230, 230),
            (105, 160, 205, 260),
            (-140, -110, -40, -10),
        ],
    )
    @pytest.mark.parametrize("clearances", [(10, 10), (10, 30), (30, 30)])
    def test_boxes_never_overlap(self, b, clearances):
        a = (0, 0, 100, 100)
        a_box, b_box = _adjusted_pair(a, b, *clearances)
        assert not bounds_overlap(a_box, b_box)
        assert not bounds_overlap(a_box, b)
        assert not bounds_overlap(b_box, a)


class TestResolveEndpoints:
    def test_two_bound_shapes(self):
        scene = Scene([_rect("A", 0, 0), _rect("B", 300, 0)])
        res = _resolve(scene, _arrow((105, 50), (295, 50), "A", "B"))
        assert res.start_element.id == "A"
        assert res.end_element.id == "B"
        assert res.start_heading == RIGHT
        assert res.end_heading == LEFT
        assert res.start_bounds == (-50, -50, 199, 150)
        assert res.end_bounds == (201, -50, 450, 150)

    def test_stacked_headings(self):
        scene = Scene([_rect("A", 0, 0), _rect("B", 0, 200)])
        res = _resolve(scene, _arrow((30, 105), (70, 195), "A", "B"))
        assert (res.start_heading, res.end_heading) == (DOWN, UP)

    def test_point_dragged_out_of_binding_area(self):
        scene = Scene([_rect("A", 0, 0)])
        res = _resolve(scene, _arrow((300, 300), (400, 300), "A"))
        assert res.start_element.id == "A"
        assert res.start_heading is None
        assert res.start_bounds is None
        assert res.avoidance_boxes == []

    def test_missing_binding_falls_back_to_hover(self, caplog):
        scene = Scene([_rect("A", 0, 0)])
        with caplog.at_level(logging.DEBUG, logger="elbow_router"):
            res = _resolve(scene, _arrow((105, 50), (300, 50), "ghost"))
        assert res.start_element.id == "A"
        assert "ghost" in caplog.text

    def test_deleted_binding_is_ignored(self):
        scene = Scene([_rect("A", 0, 0, is_deleted=True)])
        res = _resolve(scene, _arrow((105, 50), (300, 50), "A"))
        assert res.start_element is None
        assert res.start_heading is None

    def test_unbound_free_endpoint(self):
        scene = Scene([_rect("A", 0, 0)])
        res = _resolve(scene, _arrow((105, 50), (140, 120), "A"))
        assert res.end_element is None
        assert res.end_bounds is None
        # The free end's dongle at (140, 90) sits in A's padding
        assert res.start_bounds == (-50, -50, 119, 150)

    def test_free_dongle_outside_box_keeps_padding(self):
        scene = Scene([_rect("A", 0, 0)])
        res = _resolve(scene, _arrow((105, 50), (300, 300), "A"))
        assert res.start_bounds == (-50, -50, 150, 150)

    def test_free_start_pulls_end_box_back(self):
        scene = Scene([_rect("B", 0, 0)])
        res = _resolve(scene, _arrow((140, 120), (105, 50), None, "B"))
        assert res.start_bounds is None
        assert res.end_bounds == (-50, -50, 129, 150)

    def test_self_bound_box_is_not_duplicated(self):
        scene = Scene([_rect("A", 0, 0)])
        res = _resolve(scene, _arrow((105, 50), (50, -5), "A", "A"))
        assert res.start_heading == RIGHT
        assert res.end_heading == UP
        assert res.avoidance_boxes == [(-50, -50, 150, 150)]


class TestDongles:
    def test_extend_to_box_edge(self):
        boxes = [(-50, -50, 199, 150)]
        assert extend_to_box_edge((105, 50), RIGHT, boxes) == (199, 50)
        assert extend_to_box_edge((105, 50), DOWN, boxes) == (105, 150)
        assert extend_to_box_edge((300, 50), RIGHT, boxes) == (300, 50)

    def test_outermost_box_wins(self):
        boxes = [(-50, -50, 150, 150), (-20, -20, 250, 120)]
        assert extend_to_box_edge((105, 50), RIGHT, boxes) == (250, 50)

    def test_bound_dongle_is_pushed_past_box(self):
        assert build_dongle((105, 50), (295, 50), RIGHT, [(-50, -50, 199, 150)]) == (200, 50)
        assert build_dongle((295, 50), (105, 50), LEFT, [(201, -50, 450, 150)]) == (200, 50)

    def test_free_dongle_points_at_other_end(self):
        assert build_dongle((0, 0), (100, 100), None, []) == (30, 0)
        assert build_dongle((100, 100), (0, 0), None, []) == (70, 100)
        assert build_dongle((140, 120), (105, 50), None, []) == (140, 90)

"""Tests for the path-stepping kernel."""

import logging

from elbow_router.layout.routing import kernel
from elbow_router.layout.routing.kernel import next_elbow, route_segment
from elbow_router.layout.routing.trace import RouteTrace


class TestNextElbow:
    def test_straight_when_ahead(self):
        assert next_elbow([(0, 0), (30, 0)], [(70, 100), (100, 100)], []) == (70, 0)

    def test_turn_when_behind(self):
        assert next_elbow([(0, 0), (30, 0)], [(10, 100), (10, 130)], []) == (30, 100)

    def test_vertical_segment(self):
        assert next_elbow([(0, 0), (0, 30)], [(50, 80), (50, 110)], []) == (0, 80)

    def test_no_straight_continuation_after_first_step(self):
        points = [(0, 0), (10, 0)]
        end_points = [(50, 20), (80, 20)]
        assert next_elbow(points, end_points, [], step=0) == (50, 0)
        assert next_elbow(points, end_points, [], step=1) == (10, 20)

    def test_head_on_goes_half_way(self):
        # The end dongle points back at the candidate, so stop in between
        assert next_elbow([(20, 0), (10, 0)], [(30, 40), (0, 40)], []) == (10, 20)

    def test_degenerate_turn_is_replaced(self):
        assert next_elbow([(0, 0), (10, 0)], [(-20, 0), (-40, 0)], []) == (-20, 0)


class TestRouteSegment:
    def test_unbound_diagonal(self):
        path = route_segment([(0, 0), (30, 0)], [(70, 100), (100, 100)], [])
        assert path == [(0, 0), (30, 0), (70, 0), (70, 100), (100, 100)]

    def test_end_points_always_appended(self):
        path = route_segment([(0, 0), (30, 0)], [(30, 0), (60, 0)], [])
        assert path[-2:] == [(30, 0), (60, 0)]

    def test_trace_candidates(self):
        trace = RouteTrace()
        route_segment([(0, 0), (30, 0)], [(70, 100), (100, 100)], [], trace)
        assert len(trace.of_kind("candidate")) == 2
        assert trace.of_kind("step_limit") == []

    def test_step_limit_is_logged_not_raised(self, monkeypatch, caplog):
        monkeypatch.setattr(kernel, "STEP_COUNT_LIMIT", 1)
        trace = RouteTrace()
        with caplog.at_level(logging.ERROR, logger="elbow_router"):
            path = route_segment([(0, 0), (30, 0)], [(70, 100), (100, 100)], [], trace)
        assert path == [(0, 0), (30, 0), (70, 0), (70, 100), (100, 100)]
        assert "step count limit" in caplog.text
        assert len(trace.of_kind("step_limit")) == 1

    def test_terminates_around_boxes(self):
        boxes = [(-50, -50, 150, 150), (250, 250, 450, 450)]
        path = route_segment([(105, 50), (151, 50)], [(249, 350), (295, 350)], boxes)
        assert len(path) <= kernel.STEP_COUNT_LIMIT + 4
        for (x1, y1), (x2, y2) in zip(path, path[1:]):
            assert x1 == x2 or y1 == y2

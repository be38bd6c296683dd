"""Tests for path simplification and local/world transforms."""

from elbow_router.layout.routing.common import (
    simplify_elbow_points,
    to_local,
    to_world,
)
from elbow_router.parser.model import ArrowElement

PATHS = [
    [(0, 0), (30, 0), (70, 0), (70, 100), (100, 100)],
    [(105, 50), (200, 50), (200, 50), (295, 50)],
    [(0, 0), (0, 10), (0, 10), (0, 20), (5, 20)],
    [(0, 0), (10, 0), (5, 0)],
    [(1, 1)],
]


class TestSimplify:
    def test_merges_collinear_segments(self):
        assert simplify_elbow_points(PATHS[0]) == [(0, 0), (70, 0), (70, 100), (100, 100)]

    def test_drops_repeated_points(self):
        assert simplify_elbow_points(PATHS[1]) == [(105, 50), (295, 50)]
        assert simplify_elbow_points(PATHS[2]) == [(0, 0), (0, 20), (5, 20)]

    def test_keeps_reversals(self):
        assert simplify_elbow_points(PATHS[3]) == [(0, 0), (10, 0), (5, 0)]

    def test_idempotent(self):
        for path in PATHS:
            once = simplify_elbow_points(path)
            assert simplify_elbow_points(once) == once

    def test_endpoints_preserved(self):
        for path in PATHS:
            result = simplify_elbow_points(path)
            assert result[0] == path[0]
            assert result[-1] == path[-1]

    def test_empty(self):
        assert simplify_elbow_points([]) == []


class TestTransforms:
    def test_round_trip(self):
        arrow = ArrowElement(id="a", x=12.5, y=-40)
        for p in [(0, 0), (10, -3), (-7.25, 100)]:
            assert to_local(arrow, to_world(arrow, p)) == p

    def test_world_offset(self):
        arrow = ArrowElement(id="a", x=100, y=50)
        assert to_world(arrow, (5, 5)) == (105, 55)
        assert to_local(arrow, (105, 55)) == (5, 5)

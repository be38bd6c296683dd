"""Tests for single-step obstacle resolution."""

from elbow_router.layout.routing.common import get_hit_offset
from elbow_router.layout.routing.obstacles import resolve_obstacles
from elbow_router.layout.routing.trace import RouteTrace

BOX = (50, 0, 150, 80)


class TestHitOffset:
    def test_nearest_edge(self):
        ahead, right, left, hit = get_hit_offset((49, 50), (200, 50), [BOX])
        assert hit == (50, 50)
        assert ahead == 1
        # Left edge runs bottom to top, so its first vertex is below the hit
        assert right == 30
        assert left == 50

    def test_no_hit(self):
        assert get_hit_offset((0, 100), (200, 100), [BOX]) == (float("inf"), 0, 0, None)


class TestDeflection:
    def test_turn_toward_target(self):
        result = resolve_obstacles([(0, 50), (49, 50)], (200, 50), [BOX], (200, 70))
        assert result == (49, 81)

    def test_tie_prefers_left(self):
        result = resolve_obstacles([(0, 50), (49, 50)], (200, 50), [BOX], (200, 50))
        assert result == (49, 19)

    def test_never_retraces_previous_segment(self):
        # Arrived moving up, so turning right (down) would fold back
        result = resolve_obstacles([(49, 100), (49, 50)], (200, 50), [BOX], (200, 70))
        assert result == (49, 19)

    def test_blocked_turn_is_rejected(self):
        blocker = (30, 70, 70, 120)
        result = resolve_obstacles(
            [(0, 50), (49, 50)], (200, 50), [BOX, blocker], (200, 70)
        )
        assert result == (49, 19)

    def test_both_turns_blocked_keeps_candidate(self):
        boxes = [BOX, (30, 70, 70, 120), (30, -40, 70, 30)]
        result = resolve_obstacles([(0, 50), (49, 50)], (200, 50), boxes, (200, 70))
        assert result == (200, 50)

    def test_trace_records_hit_and_deflection(self):
        trace = RouteTrace()
        resolve_obstacles([(0, 50), (49, 50)], (200, 50), [BOX], (200, 70), trace=trace)
        assert [e.kind for e in trace.events] == ["obstacle_hit", "deflection"]
        assert trace.of_kind("deflection")[0].points == ((49, 50), (49, 81))


class TestSkirt:
    def test_far_obstacle_is_approached(self):
        result = resolve_obstacles([(0, 50), (10, 50)], (200, 50), [BOX], (200, 70))
        assert result == (49, 50)

    def test_end_facing_deflects_instead(self):
        result = resolve_obstacles(
            [(0, 50), (10, 50)], (200, 50), [BOX], (200, 70), end_facing=True
        )
        assert result == (10, 81)

    def test_overlapping_boxes_deflect_instead(self):
        result = resolve_obstacles(
            [(0, 50), (10, 50)], (200, 50), [BOX], (200, 70), boxes_overlap=True
        )
        assert result == (10, 81)


class TestExclusions:
    def test_no_boxes(self):
        assert resolve_obstacles([(0, 0), (10, 0)], (100, 0), [], (100, 0)) == (100, 0)

    def test_clear_path(self):
        assert resolve_obstacles([(0, 100), (10, 100)], (200, 100), [BOX], (200, 100)) == (
            200,
            100,
        )

    def test_box_containing_start_is_ignored(self):
        result = resolve_obstacles([(0, 40), (60, 40)], (200, 40), [BOX], (200, 70))
        assert result == (200, 40)

    def test_box_containing_target_still_blocks(self):
        result = resolve_obstacles([(0, 50), (10, 50)], (100, 50), [BOX], (100, 40))
        assert result == (49, 50)

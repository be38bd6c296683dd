"""Optional route tracing for debugging and visualization.

The router accepts any callable taking a ``TraceEvent``. Nothing is built
or recorded when no observer is passed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from elbow_router.layout.geometry import Bounds, Point

TRACE_KINDS: tuple[str, ...] = (
    "heading",
    "avoidance_box",
    "dongle",
    "candidate",
    "obstacle_hit",
    "deflection",
    "step_limit",
)


@dataclass(frozen=True)
class TraceEvent:
    """A single observation made while routing one arrow."""

    kind: str
    points: tuple[Point, ...] = ()
    bounds: Bounds | None = None
    detail: str = ""


Observer = Callable[[TraceEvent], None]


@dataclass
class RouteTrace:
    """Observer that records every event it receives."""

    events: list[TraceEvent] = field(default_factory=list)

    def __call__(self, event: TraceEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> list[TraceEvent]:
        return [e for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()

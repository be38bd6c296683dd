"""Elbow routing subpackage.

Public API:
- route_elbow_arrow: Route one arrow against a scene snapshot
- reroute_bound_arrows: Route arrows bound to changed elements
- route_scene: Route and commit every elbow arrow in a scene
- RouteTrace / TraceEvent: Optional observer for debugging
"""

from elbow_router.layout.routing.core import (
    reroute_bound_arrows,
    route_elbow_arrow,
    route_scene,
)
from elbow_router.layout.routing.trace import RouteTrace, TraceEvent

__all__ = [
    "RouteTrace",
    "TraceEvent",
    "reroute_bound_arrows",
    "route_elbow_arrow",
    "route_scene",
]

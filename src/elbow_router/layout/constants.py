"""Layout constants used across routing modules.

Centralizes the magic numbers of the heading resolver, dongle builder,
stepping kernel and obstacle resolver.
"""

# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------
MIN_BINDING_GAP: float = 16.0
"""Smallest distance from a shape outline that still binds an endpoint."""

MAX_BINDING_GAP: float = 32.0
"""Largest distance from a shape outline that still binds an endpoint."""

BINDING_GAP_RATIO: float = 0.25
"""Binding gap as a fraction of the shape's smaller side."""

SEARCH_CONE_MULTIPLIER: float = 2.0
"""Scale of the heading search cones relative to the binding box."""

# ---------------------------------------------------------------------------
# Avoidance boxes and dongles
# ---------------------------------------------------------------------------
AVOIDANCE_PADDING: float = 50.0
"""Padding added around a bound shape to form its avoidance box."""

DONGLE_CLEARANCE: float = 10.0
"""Gap a facing avoidance box side keeps off its shape when the gap between
the two shapes has room for both clearances."""

DONGLE_CLEARANCE_ARROWHEAD: float = 30.0
"""Minimum gap when the endpoint draws an arrowhead."""

DONGLE_PUSH: float = 1.0
"""Extra distance a dongle is pushed past its avoidance box edge."""

MIN_DONGLE_LENGTH: float = 30.0
"""Dongle length for endpoints without a resolved heading."""

# ---------------------------------------------------------------------------
# Kernel and obstacle resolution
# ---------------------------------------------------------------------------
STEP_COUNT_LIMIT: int = 50
"""Hard cap on elbow generation steps per route."""

SKIRT_THRESHOLD: float = 1.0
"""Minimum distance to an obstacle before the path skirts up to it."""

SKIRT_MARGIN: float = 1.0
"""Distance kept from an obstacle edge when skirting or deflecting."""

# ---------------------------------------------------------------------------
# Tracing
# ---------------------------------------------------------------------------
HEADING_MARKER_LENGTH: float = 20.0
"""Length of the heading marker segment emitted to trace observers."""

"""Routing geometry: primitives, binding helpers and the elbow router."""

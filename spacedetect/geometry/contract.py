from __future__ import annotations

"""
Detection Contract

Single source of truth for the tolerances and thresholds used by both space
detectors. All modules should import from here instead of hardcoding.
"""

# Lengths in meters, areas in square meters

# Graph building
NODE_MERGE_DIST = 0.05  # m, endpoints closer than this share a node

# Rooms / Spaces
MIN_ROOM_AREA = 0.5  # m², smaller polygons are noise, not rooms
MIN_WALLS_FOR_SPACE = 3

# Cycle tracing
MAX_TRACE_STEPS = 100
TURN_ANGLE_EPS = 1e-9  # rad, turns closer than this are ties

# Ray casting
RAY_COUNT = 360
MAX_RAY_LENGTH = 1000.0  # m
RAY_MIN_DISTANCE = 0.001  # m, hits closer than this to the origin are ignored
PARALLEL_EPS = 1e-10
RAY_MERGE_DIST = 0.05  # m
COLLINEAR_DIST = 0.02  # m

# Manual polygon drawing
WALL_SNAP_RADIUS = 0.5  # m


def cm(value_m: float) -> float:
    """Convert meters to centimeters."""
    return float(value_m * 100.0)

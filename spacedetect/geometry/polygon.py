"""
Polygon primitives on plain ``x``/``y`` points.

Polygons are open vertex lists (the first vertex is not repeated at the end).
Anything exposing ``x`` and ``y`` attributes is accepted; results that are
points are returned as :class:`~spacedetect.schema.Point2D`.
"""

from __future__ import annotations

import math
from typing import List, Protocol, Sequence, TypeVar

from spacedetect.schema import Point2D


class _XY(Protocol):
    x: float
    y: float


P = TypeVar("P", bound=_XY)


def distance(a: _XY, b: _XY) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def signed_area(polygon: Sequence[_XY]) -> float:
    """Shoelace area, positive for counter-clockwise winding."""
    n = len(polygon)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        total += a.x * b.y - b.x * a.y
    return total / 2.0


def polygon_area(polygon: Sequence[_XY]) -> float:
    return abs(signed_area(polygon))


def polygon_perimeter(polygon: Sequence[_XY]) -> float:
    n = len(polygon)
    if n < 2:
        return 0.0
    return sum(distance(polygon[i], polygon[(i + 1) % n]) for i in range(n))


def vertex_centroid(polygon: Sequence[_XY]) -> Point2D:
    """Arithmetic mean of the vertices.

    This is a label anchor, not a center of mass: vertices bunched on one side
    pull it away from the middle of the floor. Use :func:`area_centroid` when
    a physically meaningful center is needed.
    """
    if not polygon:
        return Point2D(x=0.0, y=0.0)
    n = len(polygon)
    return Point2D(
        x=sum(p.x for p in polygon) / n,
        y=sum(p.y for p in polygon) / n,
    )


def area_centroid(polygon: Sequence[_XY]) -> Point2D:
    """Area-weighted centroid (center of mass of the enclosed region)."""
    n = len(polygon)
    area2 = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        cross = a.x * b.y - b.x * a.y
        area2 += cross
        cx += (a.x + b.x) * cross
        cy += (a.y + b.y) * cross
    if n < 3 or abs(area2) < 1e-12:
        return vertex_centroid(polygon)
    return Point2D(x=cx / (3.0 * area2), y=cy / (3.0 * area2))


def point_in_polygon(point: _XY, polygon: Sequence[_XY]) -> bool:
    """Even-odd test with a horizontal ray towards +x."""
    n = len(polygon)
    if n < 3:
        return False
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def is_counter_clockwise(polygon: Sequence[_XY]) -> bool:
    return signed_area(polygon) > 0.0


def ensure_counter_clockwise(polygon: List[P]) -> List[P]:
    """Return the polygon in counter-clockwise order.

    Space boundaries handed to the IFC side must wind counter-clockwise so
    that edge normals consistently point outwards. Already counter-clockwise
    (or degenerate) input is returned as is.
    """
    if len(polygon) < 3:
        return polygon
    if signed_area(polygon) < 0.0:
        return list(reversed(polygon))
    return polygon


def point_to_segment_distance(point: _XY, seg_start: _XY, seg_end: _XY) -> float:
    """Shortest distance from ``point`` to the segment between the two points."""
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y
    length_sq = dx * dx + dy * dy
    if length_sq < 1e-20:
        return distance(point, seg_start)
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.x - (seg_start.x + t * dx), point.y - (seg_start.y + t * dy))

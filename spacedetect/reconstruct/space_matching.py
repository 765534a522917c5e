"""Relate detected spaces to existing spaces and to the walls around a drawn outline."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from spacedetect.geometry.contract import WALL_SNAP_RADIUS
from spacedetect.geometry.polygon import distance
from spacedetect.schema import DetectedSpace, Point2D, WallSegment


def same_wall_set(a: DetectedSpace, b: DetectedSpace) -> bool:
    """True when both spaces are bounded by exactly the same walls."""
    return a.wall_id_set == b.wall_id_set


def find_existing_space(
    detected: DetectedSpace,
    existing: Iterable[DetectedSpace],
) -> Optional[DetectedSpace]:
    """Return the first existing space bounded by the same walls, if any.

    Used before creating a Space element so the same room is not placed twice.
    Spaces without bounding walls never match.
    """
    if not detected.bounding_wall_ids:
        return None
    for space in existing:
        if same_wall_set(detected, space):
            return space
    return None


def walls_near_polygon(
    polygon: Sequence[Point2D],
    walls: Iterable[WallSegment],
    radius: float = WALL_SNAP_RADIUS,
) -> List[str]:
    """Ids of walls with an endpoint within ``radius`` of any outline vertex.

    Associates a manually drawn space outline with the walls it was drawn
    against.
    """
    wall_ids: List[str] = []
    for wall in walls:
        for vertex in polygon:
            if distance(wall.start, vertex) < radius or distance(wall.end, vertex) < radius:
                wall_ids.append(wall.id)
                break
    return wall_ids

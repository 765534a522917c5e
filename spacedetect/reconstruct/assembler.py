"""Turn a closed outline and its walls into a DetectedSpace."""

from __future__ import annotations

from typing import Iterable, List, Optional

from spacedetect.geometry.contract import MIN_ROOM_AREA
from spacedetect.geometry.polygon import (
    ensure_counter_clockwise,
    polygon_area,
    polygon_perimeter,
    vertex_centroid,
)
from spacedetect.schema import DetectedSpace, Point2D


def assemble_space(
    polygon: List[Point2D],
    wall_ids: Iterable[str],
    min_area: float = MIN_ROOM_AREA,
) -> Optional[DetectedSpace]:
    """Build the DetectedSpace record shared by both detectors.

    Args:
        polygon: Open outline, any winding
        wall_ids: Walls touching the outline, duplicates allowed
        min_area: Smaller outlines (m²) are rejected

    Returns:
        DetectedSpace with a counter-clockwise outline, or None when the
        outline has fewer than three vertices or too little area
    """
    if len(polygon) < 3:
        return None

    area = polygon_area(polygon)
    if area < min_area:
        return None

    boundary = ensure_counter_clockwise(list(polygon))
    return DetectedSpace(
        boundary_polygon=boundary,
        bounding_wall_ids=list(dict.fromkeys(wall_ids)),
        area=area,
        perimeter=polygon_perimeter(boundary),
        centroid=vertex_centroid(boundary),
    )

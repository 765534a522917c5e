"""
spacedetect

Detect rooms (spaces) from the wall centerlines of a floor plan.
"""

from .geometry import (
    area_centroid,
    ensure_counter_clockwise,
    point_in_polygon,
    polygon_area,
    polygon_perimeter,
    vertex_centroid,
)
from .reconstruct import (
    DetectionConfig,
    detect_space_at_point,
    detect_spaces,
    find_existing_space,
    walls_near_polygon,
)
from .schema import DetectedSpace, Point2D, WallSegment

__version__ = "0.1.0"

__all__ = [
    # Models
    "Point2D",
    "WallSegment",
    "DetectedSpace",
    "DetectionConfig",
    # Detection
    "detect_spaces",
    "detect_space_at_point",
    # Matching
    "find_existing_space",
    "walls_near_polygon",
    # Polygon math
    "polygon_area",
    "polygon_perimeter",
    "vertex_centroid",
    "area_centroid",
    "point_in_polygon",
    "ensure_counter_clockwise",
]

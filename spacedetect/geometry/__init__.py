"""Plain 2D geometry shared by the space detectors."""

from .polygon import (
    area_centroid,
    distance,
    ensure_counter_clockwise,
    is_counter_clockwise,
    point_in_polygon,
    point_to_segment_distance,
    polygon_area,
    polygon_perimeter,
    signed_area,
    vertex_centroid,
)

__all__ = [
    "area_centroid",
    "distance",
    "ensure_counter_clockwise",
    "is_counter_clockwise",
    "point_in_polygon",
    "point_to_segment_distance",
    "polygon_area",
    "polygon_perimeter",
    "signed_area",
    "vertex_centroid",
]

"""Space detection from wall centerlines: graph cycles and ray casting."""

from .assembler import assemble_space
from .config import DetectionConfig
from .detection import detect_space_at_point, detect_spaces
from .space_matching import find_existing_space, same_wall_set, walls_near_polygon
from .spaces_graph import Cycle, MinimalCycleDetector
from .spaces_raycast import RayCastDetector, RayHit
from .wall_graph import GraphEdge, GraphNode, WallGraph, build_wall_graph

__all__ = [
    "assemble_space",
    "DetectionConfig",
    "detect_space_at_point",
    "detect_spaces",
    "find_existing_space",
    "same_wall_set",
    "walls_near_polygon",
    "Cycle",
    "MinimalCycleDetector",
    "RayCastDetector",
    "RayHit",
    "GraphEdge",
    "GraphNode",
    "WallGraph",
    "build_wall_graph",
]

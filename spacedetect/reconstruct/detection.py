"""
Room Detection

Entry points for deriving spaces (rooms) from wall centerlines, either every
closed region of the drawing or the single region around a clicked point.
Insufficient or malformed input yields an empty result, never an exception.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

from loguru import logger

from spacedetect.exceptions import ConfigurationError
from spacedetect.geometry.contract import MIN_WALLS_FOR_SPACE, NODE_MERGE_DIST
from spacedetect.reconstruct.assembler import assemble_space
from spacedetect.reconstruct.config import DetectionConfig
from spacedetect.reconstruct.spaces_graph import MinimalCycleDetector
from spacedetect.reconstruct.spaces_raycast import RayCastDetector
from spacedetect.reconstruct.wall_graph import build_wall_graph
from spacedetect.schema import DetectedSpace, Point2D, WallSegment


def detect_spaces(
    walls: Sequence[WallSegment],
    tolerance: float = NODE_MERGE_DIST,
    config: DetectionConfig | None = None,
) -> List[DetectedSpace]:
    """Detect every closed space formed by the walls.

    Args:
        walls: Wall centerlines of one storey
        tolerance: Endpoint merge radius in meters; overrides
            ``config.merge_tolerance`` when it differs from the default
        config: Detection configuration (uses defaults if None)

    Returns:
        Detected spaces, largest first. Empty when fewer than three walls are
        given, the tolerance is not positive or no closed loop exists.
    """
    if config is None:
        config = DetectionConfig()
    if tolerance != NODE_MERGE_DIST:
        try:
            config = config.with_overrides(merge_tolerance=tolerance)
        except ConfigurationError:
            logger.warning("Invalid merge tolerance {}, no spaces detected", tolerance)
            return []

    if len(walls) < MIN_WALLS_FOR_SPACE:
        return []

    t0 = time.perf_counter()
    graph = build_wall_graph(
        walls,
        tolerance=config.merge_tolerance,
        prune_dangling=config.prune_dangling_walls,
    )
    detector = MinimalCycleDetector(
        graph,
        max_steps=config.max_trace_steps,
        min_area=config.min_room_area,
    )

    spaces: List[DetectedSpace] = []
    for cycle in detector.find_cycles():
        space = assemble_space(cycle.points, cycle.wall_ids, min_area=config.min_room_area)
        if space is not None:
            spaces.append(space)

    spaces.sort(key=lambda s: s.area, reverse=True)
    logger.info(
        "Detected {} space(s) from {} walls in {:.1f} ms",
        len(spaces),
        len(walls),
        (time.perf_counter() - t0) * 1000.0,
    )
    return spaces


def detect_space_at_point(
    point: Point2D,
    walls: Sequence[WallSegment],
    config: DetectionConfig | None = None,
) -> Optional[DetectedSpace]:
    """Detect the space enclosing a point by casting rays from it.

    Args:
        point: Query location, typically a click inside a room
        walls: Wall centerlines of one storey
        config: Detection configuration (uses defaults if None)

    Returns:
        The enclosing space, or None when fewer than three walls are given or
        the point is not enclosed
    """
    if len(walls) < MIN_WALLS_FOR_SPACE:
        return None

    space = RayCastDetector(walls, config).detect(point)
    if space is None:
        logger.info("No enclosed space at ({:.3f}, {:.3f})", point.x, point.y)
    return space

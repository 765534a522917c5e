"""
Ray-cast space detection.

Finds the room around a single query point by casting rays in all directions
against the raw wall segments, like a paint bucket: no graph connectivity is
needed, so it copes with wall endpoints that do not quite meet.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger
from shapely.errors import GEOSException
from shapely.geometry import Polygon

from spacedetect.geometry.polygon import distance, point_in_polygon, point_to_segment_distance
from spacedetect.reconstruct.assembler import assemble_space
from spacedetect.reconstruct.config import DetectionConfig
from spacedetect.schema import DetectedSpace, Point2D, WallSegment


@dataclass
class RayHit:
    point: Point2D
    wall_id: str
    distance: float
    angle: float


class RayCastDetector:
    """Detect the enclosure around a point from the closest wall hit per ray."""

    def __init__(self, walls: Sequence[WallSegment], config: DetectionConfig | None = None):
        self.config = config or DetectionConfig()
        self.walls = list(walls)
        self._starts = np.array([[w.start.x, w.start.y] for w in self.walls], dtype=np.float64).reshape(-1, 2)
        self._ends = np.array([[w.end.x, w.end.y] for w in self.walls], dtype=np.float64).reshape(-1, 2)

    def nearest_wall(self, point: Point2D) -> Optional[WallSegment]:
        if not self.walls:
            return None
        return min(self.walls, key=lambda w: point_to_segment_distance(point, w.start, w.end))

    def cast_rays(self, origin: Point2D) -> List[RayHit]:
        """Closest wall hit for each of ``ray_count`` evenly spaced rays, in angle order."""
        cfg = self.config
        if not self.walls:
            return []

        angles = np.arange(cfg.ray_count, dtype=np.float64) * (2.0 * math.pi / cfg.ray_count)
        dir_x = np.cos(angles)[:, None]
        dir_y = np.sin(angles)[:, None]

        seg = self._ends - self._starts
        seg_x = seg[:, 0][None, :]
        seg_y = seg[:, 1][None, :]
        q_x = (self._starts[:, 0] - origin.x)[None, :]
        q_y = (self._starts[:, 1] - origin.y)[None, :]

        # Ray O + t*r against segment S + s*(E - S), one row per ray
        denom = dir_x * seg_y - dir_y * seg_x
        with np.errstate(divide="ignore", invalid="ignore"):
            t = (q_x * seg_y - q_y * seg_x) / denom
            s = (q_x * dir_y - q_y * dir_x) / denom

        valid = (
            (np.abs(denom) >= cfg.parallel_epsilon)
            & (t > cfg.ray_min_distance)
            & (t <= cfg.max_ray_length)
            & (s >= 0.0)
            & (s <= 1.0)
        )
        t = np.where(valid, t, np.inf)

        # argmin keeps the earlier wall when two hits are equally close
        nearest = np.argmin(t, axis=1)
        nearest_t = t[np.arange(cfg.ray_count), nearest]

        hits: List[RayHit] = []
        for ray in np.flatnonzero(np.isfinite(nearest_t)):
            dist = float(nearest_t[ray])
            angle = float(angles[ray])
            hits.append(
                RayHit(
                    point=Point2D(
                        x=origin.x + dist * math.cos(angle),
                        y=origin.y + dist * math.sin(angle),
                    ),
                    wall_id=self.walls[int(nearest[ray])].id,
                    distance=dist,
                    angle=angle,
                )
            )
        return hits

    def detect(self, point: Point2D) -> Optional[DetectedSpace]:
        """Space enclosing ``point``, or None.

        A point closer than ``ray_merge_threshold`` to a wall is treated as a
        click on that wall and yields None: hits that near are merged away or
        skipped (``ray_min_distance``), and the rays would leak into the room
        on the other side.
        """
        wall = self.nearest_wall(point)
        clearance = point_to_segment_distance(point, wall.start, wall.end) if wall is not None else math.inf
        if clearance < self.config.ray_merge_threshold:
            logger.debug("Point ({}, {}) lies on wall {}", point.x, point.y, wall.id)
            return None

        hits = self.cast_rays(point)
        if len(hits) < 3:
            logger.debug("Only {} of {} rays hit a wall from ({}, {})", len(hits), self.config.ray_count, point.x, point.y)
            return None

        boundary, wall_ids = simplify_boundary(
            hits,
            merge_threshold=self.config.ray_merge_threshold,
            collinear_threshold=self.config.collinear_threshold,
        )
        if len(boundary) < 3:
            return None
        if not point_in_polygon(point, boundary):
            # Rays from outside only see the near side of the walls
            logger.debug("Point ({}, {}) lies outside the hit outline", point.x, point.y)
            return None

        space = assemble_space(boundary, wall_ids, min_area=self.config.min_room_area)
        if space is None:
            logger.debug("Ray-cast boundary around ({}, {}) is below {} m²", point.x, point.y, self.config.min_room_area)
        return space


def merge_close_hits(hits: List[RayHit], threshold: float) -> List[RayHit]:
    """Collapse consecutive hits closer than ``threshold`` (e.g. several rays into one corner)."""
    merged: List[RayHit] = []
    for hit in sorted(hits, key=lambda h: h.angle):
        if merged and distance(hit.point, merged[-1].point) <= threshold:
            continue
        merged.append(hit)

    # The list wraps around at 360°
    if len(merged) > 1 and distance(merged[0].point, merged[-1].point) < threshold:
        merged.pop()
    return merged


def remove_collinear_hits(hits: List[RayHit], threshold: float) -> List[RayHit]:
    """Drop hits that deviate less than ``threshold`` from the outline through their neighbours.

    Runs a topology-preserving Douglas-Peucker pass over the closed ring and
    keeps the hits whose coordinates survive. Never returns fewer than three
    hits: when simplification would collapse the ring the input is returned.
    """
    if len(hits) <= 3 or threshold <= 0.0:
        return hits

    try:
        ring = Polygon([(h.point.x, h.point.y) for h in hits])
        simplified = ring.simplify(threshold, preserve_topology=True)
    except GEOSException as exc:
        logger.warning("Boundary simplification failed, keeping all hits: {}", exc)
        return hits

    if simplified.is_empty or not isinstance(simplified, Polygon):
        return hits

    kept = set(simplified.exterior.coords)
    result = [h for h in hits if (h.point.x, h.point.y) in kept]
    if len(result) < 3:
        return hits
    return result


def simplify_boundary(
    hits: List[RayHit],
    merge_threshold: float,
    collinear_threshold: float,
) -> Tuple[List[Point2D], List[str]]:
    """Reduce angle-ordered hits to an outline and the distinct walls it touches.

    Wall ids come from the merged hits: the simplified outline keeps only
    points near corners and can skip every hit of a wall it still runs along.
    """
    if not hits:
        return [], []

    merged = merge_close_hits(hits, merge_threshold)
    simplified = remove_collinear_hits(merged, collinear_threshold)
    wall_ids = list(dict.fromkeys(h.wall_id for h in merged))
    return [h.point for h in simplified], wall_ids

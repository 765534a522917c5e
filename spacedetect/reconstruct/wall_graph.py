"""Build the wall endpoint graph with tolerance snapping."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from loguru import logger

from spacedetect.geometry.contract import NODE_MERGE_DIST, cm
from spacedetect.geometry.polygon import distance
from spacedetect.schema import Point2D, WallSegment


@dataclass
class GraphEdge:
    """One direction of a wall, owned by the node it leaves."""
    wall_id: str
    target_node_key: str
    start: Point2D
    end: Point2D


@dataclass
class GraphNode:
    """Graph node representing a (merged) wall endpoint."""
    key: str
    point: Point2D
    edges: List[GraphEdge] = field(default_factory=list)

    @property
    def degree(self) -> int:
        return len(self.edges)


class WallGraph:
    """Undirected wall graph; every wall contributes one edge per direction.

    Nodes live in ``nodes`` keyed by a canonical coordinate string and edges
    refer to their target by that key only.
    """

    def __init__(self, tolerance: float = NODE_MERGE_DIST):
        self.tolerance = tolerance
        self.nodes: Dict[str, GraphNode] = {}
        # Key resolution follows the merge radius, e.g. 0.05 -> 2 decimals
        self._key_precision = max(0, math.ceil(-math.log10(tolerance))) if tolerance > 0 else 6

    def _point_key(self, point: Point2D) -> str:
        precision = self._key_precision
        factor = 10 ** precision
        x = round(point.x * factor) / factor
        y = round(point.y * factor) / factor
        key = f"{x:.{precision}f}_{y:.{precision}f}"
        if key not in self.nodes:
            return key
        suffix = 1
        while f"{key}#{suffix}" in self.nodes:
            suffix += 1
        return f"{key}#{suffix}"

    def find_node(self, point: Point2D) -> Optional[GraphNode]:
        """First node within tolerance of point, if any."""
        for node in self.nodes.values():
            if distance(node.point, point) < self.tolerance:
                return node
        return None

    def _snap_point(self, point: Point2D) -> GraphNode:
        """Find or create node near point."""
        node = self.find_node(point)
        if node is not None:
            return node
        key = self._point_key(point)
        node = GraphNode(key=key, point=point)
        self.nodes[key] = node
        return node

    def add_wall(self, wall: WallSegment) -> bool:
        """Add wall to graph with snapping. Returns False for degenerate walls."""
        if distance(wall.start, wall.end) < self.tolerance:
            logger.debug(
                "Skipping wall {} shorter than the {:.1f} cm merge radius",
                wall.id,
                cm(self.tolerance),
            )
            return False

        start_node = self._snap_point(wall.start)
        end_node = self._snap_point(wall.end)

        if start_node.key == end_node.key:
            # Both ends snapped onto the same existing node
            logger.debug("Skipping wall {}: both endpoints snap to node {}", wall.id, start_node.key)
            return False

        start_node.edges.append(
            GraphEdge(wall_id=wall.id, target_node_key=end_node.key, start=wall.start, end=wall.end)
        )
        end_node.edges.append(
            GraphEdge(wall_id=wall.id, target_node_key=start_node.key, start=wall.end, end=wall.start)
        )
        return True

    def prune_dangling(self) -> List[str]:
        """Repeatedly remove nodes with fewer than two edges.

        Returns the ids of the walls that were dropped. A wall hanging off a
        room (or ending mid-span on another wall) has a free end and can never
        be part of a closed boundary.
        """
        removed: List[str] = []
        pending = [key for key, node in self.nodes.items() if node.degree < 2]
        while pending:
            key = pending.pop()
            node = self.nodes.pop(key, None)
            if node is None:
                continue
            for edge in node.edges:
                removed.append(edge.wall_id)
                neighbour = self.nodes.get(edge.target_node_key)
                if neighbour is None:
                    continue
                neighbour.edges = [
                    e for e in neighbour.edges
                    if not (e.wall_id == edge.wall_id and e.target_node_key == key)
                ]
                if neighbour.degree < 2:
                    pending.append(neighbour.key)
        if removed:
            logger.debug("Pruned {} dangling wall(s): {}", len(removed), sorted(set(removed)))
        return removed

    @property
    def wall_ids(self) -> set[str]:
        return {edge.wall_id for node in self.nodes.values() for edge in node.edges}

    @property
    def edge_count(self) -> int:
        return sum(node.degree for node in self.nodes.values())


def build_wall_graph(
    walls: Iterable[WallSegment],
    tolerance: float = NODE_MERGE_DIST,
    prune_dangling: bool = False,
) -> WallGraph:
    """Build the endpoint graph for a wall list.

    Args:
        walls: Wall centerlines
        tolerance: Merge radius for endpoints in meters
        prune_dangling: Remove walls with a free end afterwards

    Returns:
        The populated WallGraph
    """
    graph = WallGraph(tolerance)
    added = 0
    for wall in walls:
        if graph.add_wall(wall):
            added += 1
    if prune_dangling:
        graph.prune_dangling()
    logger.debug("Wall graph: {} walls, {} nodes", added, len(graph.nodes))
    return graph

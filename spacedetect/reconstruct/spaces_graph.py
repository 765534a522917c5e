from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from loguru import logger

from spacedetect.geometry.contract import MAX_TRACE_STEPS, MIN_ROOM_AREA, TURN_ANGLE_EPS
from spacedetect.geometry.polygon import distance, polygon_area, signed_area
from spacedetect.reconstruct.wall_graph import GraphEdge, GraphNode, WallGraph
from spacedetect.schema import Point2D


DirectedEdgeKey = Tuple[str, str, str]


@dataclass
class Cycle:
    """Closed traversal; ``wall_ids[i]`` joins ``points[i]`` and ``points[i + 1]``."""
    points: List[Point2D] = field(default_factory=list)
    wall_ids: List[str] = field(default_factory=list)

    @property
    def canonical_key(self) -> str:
        return ",".join(sorted(self.wall_ids))

    @property
    def area(self) -> float:
        return polygon_area(self.points)

    @property
    def signed_area(self) -> float:
        return signed_area(self.points)


def directed_edge_key(from_key: str, edge: GraphEdge) -> DirectedEdgeKey:
    return (from_key, edge.target_node_key, edge.wall_id)


def _wrap_angle(angle: float) -> float:
    """Wrap into (-pi, pi]."""
    while angle > math.pi:
        angle -= 2.0 * math.pi
    while angle <= -math.pi:
        angle += 2.0 * math.pi
    return angle


def _heading(a: Point2D, b: Point2D) -> float:
    return math.atan2(b.y - a.y, b.x - a.x)


class MinimalCycleDetector:
    """Trace the minimal faces of a wall graph.

    Each wall is walked once per direction: an interior wall borders two
    rooms, one on each side, so the visited bookkeeping is per directed edge.
    A fresh visited set is created for every :meth:`find_cycles` call.
    """

    def __init__(
        self,
        graph: WallGraph,
        max_steps: int = MAX_TRACE_STEPS,
        min_area: float = MIN_ROOM_AREA,
    ):
        self.graph = graph
        self.max_steps = max_steps
        self.min_area = min_area

    def find_cycles(self) -> List[Cycle]:
        nodes = self.graph.nodes
        visited: Set[DirectedEdgeKey] = set()
        traced: List[Cycle] = []
        abandoned = 0

        for start in nodes.values():
            if start.degree < 2:
                continue
            for start_edge in start.edges:
                if directed_edge_key(start.key, start_edge) in visited:
                    continue
                cycle = self._trace(start, start_edge, visited)
                if cycle is None:
                    abandoned += 1
                    continue
                traced.append(cycle)

        # Left-turn tracing walks bounded faces counter-clockwise; the
        # clockwise trace of a component is its outer boundary.
        inner = [c for c in traced if c.signed_area > 0.0]

        unique: List[Cycle] = []
        seen: Set[str] = set()
        for cycle in inner:
            key = cycle.canonical_key
            if key in seen:
                continue
            seen.add(key)
            unique.append(cycle)

        rooms = [c for c in unique if c.area >= self.min_area]
        rooms.sort(key=lambda c: c.area, reverse=True)

        logger.debug(
            "Cycle detection: {} traced, {} outer, {} duplicate, {} below {} m², {} abandoned",
            len(traced),
            len(traced) - len(inner),
            len(inner) - len(unique),
            len(unique) - len(rooms),
            self.min_area,
            abandoned,
        )
        return rooms

    def _trace(
        self,
        start: GraphNode,
        start_edge: GraphEdge,
        visited: Set[DirectedEdgeKey],
    ) -> Optional[Cycle]:
        nodes = self.graph.nodes
        path: List[Tuple[GraphNode, GraphEdge]] = []
        used: Set[DirectedEdgeKey] = set()

        current = start
        edge = start_edge
        for _ in range(self.max_steps):
            target = nodes.get(edge.target_node_key)
            if target is None:
                return None

            path.append((current, edge))
            used.add(directed_edge_key(current.key, edge))

            if target.key == start.key and len(path) >= 3:
                for node, step in path:
                    visited.add(directed_edge_key(node.key, step))
                return Cycle(
                    points=[node.point for node, _ in path],
                    wall_ids=[step.wall_id for _, step in path],
                )

            nxt = self.leftmost_edge(current, target, edge, used)
            if nxt is None:
                return None
            current = target
            edge = nxt

        logger.debug("Trace from node {} abandoned after {} steps", start.key, self.max_steps)
        return None

    def leftmost_edge(
        self,
        previous: GraphNode,
        node: GraphNode,
        incoming: GraphEdge,
        used: Set[DirectedEdgeKey],
    ) -> Optional[GraphEdge]:
        """Outgoing edge making the largest left turn relative to the incoming direction."""
        nodes = self.graph.nodes
        in_angle = _heading(previous.point, node.point)

        best: Optional[GraphEdge] = None
        best_rank: Optional[Tuple[float, float, str]] = None
        for edge in node.edges:
            if edge.wall_id == incoming.wall_id:
                continue
            if directed_edge_key(node.key, edge) in used:
                continue
            target = nodes.get(edge.target_node_key)
            if target is None:
                continue

            turn = _wrap_angle(_heading(node.point, target.point) - in_angle)
            length = distance(node.point, target.point)
            # Equal turns: shorter wall first, then wall id
            rank = (-turn, length, edge.wall_id)
            if best_rank is None or _ranks_before(rank, best_rank):
                best = edge
                best_rank = rank
        return best


def _ranks_before(rank: Tuple[float, float, str], other: Tuple[float, float, str]) -> bool:
    if abs(rank[0] - other[0]) > TURN_ANGLE_EPS:
        return rank[0] < other[0]
    return rank[1:] < other[1:]

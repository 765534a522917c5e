"""Canonical models exchanged with the wall editor and the Space factory."""

from __future__ import annotations

import math
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Point2D(BaseModel):
    """2D point in meters."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class WallSegment(BaseModel):
    """Wall centerline as drawn by the user."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable external wall identifier")
    start: Point2D
    end: Point2D

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)


class DetectedSpace(BaseModel):
    """Enclosed floor area found between walls, before it becomes a Space element."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    boundary_polygon: List[Point2D] = Field(..., min_length=3, description="Counter-clockwise outline")
    bounding_wall_ids: List[str] = Field(default_factory=list, description="Walls forming the boundary")
    area: float = Field(..., ge=0.0, description="Floor area in square meters")
    perimeter: float = Field(..., ge=0.0, description="Outline length in meters")
    centroid: Point2D = Field(..., description="Vertex average, used for label placement")

    @property
    def wall_id_set(self) -> frozenset[str]:
        return frozenset(self.bounding_wall_ids)

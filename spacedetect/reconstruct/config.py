"""
Space Detection Configuration

Tolerances for both detectors with Pydantic validation. Defaults come from
``spacedetect.geometry.contract``.
"""

from __future__ import annotations

from typing import Any

import pydantic
from pydantic import BaseModel, Field, model_validator

from spacedetect.exceptions import ConfigurationError
from spacedetect.geometry.contract import (
    COLLINEAR_DIST,
    MAX_RAY_LENGTH,
    MAX_TRACE_STEPS,
    MIN_ROOM_AREA,
    NODE_MERGE_DIST,
    PARALLEL_EPS,
    RAY_COUNT,
    RAY_MERGE_DIST,
    RAY_MIN_DISTANCE,
)


class DetectionConfig(BaseModel):
    """Parameters shared by graph-based and ray-cast space detection."""

    # Graph building
    merge_tolerance: float = Field(
        default=NODE_MERGE_DIST,
        gt=0.0,
        le=10.0,
        description="Wall endpoints closer than this (m) are merged into one node",
    )
    prune_dangling_walls: bool = Field(
        default=True,
        description="Drop walls with a free end before tracing rooms",
    )

    # Rooms
    min_room_area: float = Field(
        default=MIN_ROOM_AREA,
        ge=0.0,
        description="Smaller enclosed areas (m²) are discarded as noise",
    )

    # Cycle tracing
    max_trace_steps: int = Field(
        default=MAX_TRACE_STEPS,
        ge=3,
        le=100000,
        description="A boundary trace is abandoned after this many walls",
    )

    # Ray casting
    ray_count: int = Field(
        default=RAY_COUNT,
        ge=3,
        le=36000,
        description="Number of rays cast around the query point",
    )
    max_ray_length: float = Field(
        default=MAX_RAY_LENGTH,
        gt=0.0,
        description="Walls further away than this (m) are ignored",
    )
    ray_min_distance: float = Field(
        default=RAY_MIN_DISTANCE,
        ge=0.0,
        description="Hits closer than this (m) to the query point are ignored",
    )
    parallel_epsilon: float = Field(
        default=PARALLEL_EPS,
        gt=0.0,
        description="Ray/wall determinant below which the two are treated as parallel",
    )
    ray_merge_threshold: float = Field(
        default=RAY_MERGE_DIST,
        ge=0.0,
        description="Consecutive hits closer than this (m) are merged",
    )
    collinear_threshold: float = Field(
        default=COLLINEAR_DIST,
        ge=0.0,
        description="Boundary points deviating less than this (m) from their neighbours are dropped",
    )

    @model_validator(mode="after")
    def validate_ray_range(self) -> "DetectionConfig":
        """Ensure the ray has a non-empty hit range."""
        if self.ray_min_distance >= self.max_ray_length:
            raise ValueError(
                f"ray_min_distance ({self.ray_min_distance}m) must be less than "
                f"max_ray_length ({self.max_ray_length}m)"
            )
        return self

    @classmethod
    def default(cls) -> "DetectionConfig":
        return cls()

    def with_overrides(self, **overrides: Any) -> "DetectionConfig":
        """Copy with ``overrides`` applied and validated like a fresh config.

        Raises:
            ConfigurationError: If an override violates a field bound
        """
        try:
            return type(self).model_validate({**self.model_dump(), **overrides})
        except pydantic.ValidationError as exc:
            raise ConfigurationError(
                f"Invalid detection setting: {exc.error_count()} error(s)",
                {"errors": str(exc)},
            ) from exc

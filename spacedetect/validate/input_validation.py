"""
Input Validation for Wall Payloads

Parses raw wall payloads (as exported by the editor) into WallSegment models
and reports walls that cannot bound a space, before detection runs.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, List

import pydantic
from loguru import logger
from pydantic import TypeAdapter

from spacedetect.exceptions import GeometryError, WallInputError
from spacedetect.geometry.contract import NODE_MERGE_DIST
from spacedetect.schema import WallSegment

_WALL_LIST = TypeAdapter(List[WallSegment])


class WallValidationResult:
    """Result of wall validation."""

    def __init__(
        self,
        valid_walls: list[WallSegment],
        degenerate_wall_ids: list[str],
        duplicate_wall_ids: list[str],
        warnings: list[str],
        statistics: dict[str, Any],
    ):
        self.valid_walls = valid_walls
        self.degenerate_wall_ids = degenerate_wall_ids
        self.duplicate_wall_ids = duplicate_wall_ids
        self.warnings = warnings
        self.statistics = statistics

    @property
    def is_valid(self) -> bool:
        return len(self.valid_walls) >= 3


def parse_walls(payload: Any) -> List[WallSegment]:
    """Parse a list of wall dicts, or a mapping with a ``walls`` list.

    Args:
        payload: Decoded JSON, e.g. ``{"walls": [{"id": "w1", "start": {...}, "end": {...}}]}``

    Returns:
        Parsed wall segments in input order

    Raises:
        WallInputError: If the payload does not describe walls
        GeometryError: If a coordinate is NaN or infinite
    """
    if isinstance(payload, dict):
        if "walls" not in payload:
            raise WallInputError("Wall payload has no 'walls' list", {"keys": ", ".join(sorted(payload))})
        payload = payload["walls"]

    try:
        walls = _WALL_LIST.validate_python(payload)
    except pydantic.ValidationError as exc:
        raise WallInputError(
            f"Invalid wall payload: {exc.error_count()} error(s)",
            {"errors": str(exc)},
        ) from exc

    for wall in walls:
        coords = (wall.start.x, wall.start.y, wall.end.x, wall.end.y)
        if not all(math.isfinite(c) for c in coords):
            raise GeometryError(f"Wall {wall.id} has a non-finite coordinate", {"wall_id": wall.id})
    return walls


def load_walls_file(path: Path) -> List[WallSegment]:
    """Read and parse a JSON wall file.

    Raises:
        WallInputError: If the file is missing, is not JSON, or holds no walls
    """
    if not path.exists():
        raise WallInputError(f"Wall file not found: {path}", {"path": str(path)})
    try:
        with path.open("r", encoding="utf-8") as fp:
            payload = json.load(fp)
    except json.JSONDecodeError as exc:
        raise WallInputError(f"Wall file is not valid JSON: {path}", {"path": str(path), "error": str(exc)}) from exc
    return parse_walls(payload)


def validate_walls(
    walls: List[WallSegment],
    tolerance: float = NODE_MERGE_DIST,
) -> WallValidationResult:
    """Check walls before detection without rejecting the input.

    Checks:
    - Walls shorter than the merge tolerance (cannot bound a region)
    - Repeated wall ids (the later wall shadows the earlier in results)
    - Fewer than three usable walls
    """
    valid_walls: list[WallSegment] = []
    degenerate: list[str] = []
    duplicates: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()

    for wall in walls:
        if wall.id in seen:
            duplicates.append(wall.id)
        seen.add(wall.id)
        if wall.length < tolerance:
            degenerate.append(wall.id)
            continue
        valid_walls.append(wall)

    if degenerate:
        warnings.append(f"{len(degenerate)} wall(s) shorter than {tolerance} m are ignored")
    if duplicates:
        warnings.append(f"Duplicate wall ids: {', '.join(sorted(set(duplicates)))}")
    if len(valid_walls) < 3:
        warnings.append("At least 3 walls are needed to enclose a space")

    stats = {
        "total": len(walls),
        "valid": len(valid_walls),
        "degenerate": len(degenerate),
        "duplicate_ids": len(duplicates),
    }
    logger.info(
        "Wall validation: {} valid, {} degenerate out of {} total walls",
        stats["valid"],
        stats["degenerate"],
        stats["total"],
    )

    return WallValidationResult(
        valid_walls=valid_walls,
        degenerate_wall_ids=degenerate,
        duplicate_wall_ids=duplicates,
        warnings=warnings,
        statistics=stats,
    )

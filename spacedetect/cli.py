"""CLI for space detection."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from spacedetect.exceptions import SpaceDetectError
from spacedetect.logging_config import setup_logging
from spacedetect.reconstruct.detection import detect_space_at_point, detect_spaces
from spacedetect.schema import Point2D
from spacedetect.settings import Settings
from spacedetect.validate.input_validation import load_walls_file, validate_walls

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spacedetect",
        description="Detect enclosed spaces (rooms) from wall centerlines",
    )
    parser.add_argument("walls", type=Path, help="JSON file with a 'walls' list (id, start, end)")
    parser.add_argument("--point", type=float, nargs=2, metavar=("X", "Y"), help="Only detect the space around this point")
    parser.add_argument("--tolerance", type=float, help="Endpoint merge tolerance in meters (overrides config)")
    parser.add_argument("--min-area", type=float, help="Minimum room area in square meters (overrides config)")
    parser.add_argument("--config", type=Path, help="YAML settings file (default: $SPACEDETECT_CONFIG)")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.load(args.config)
    except SpaceDetectError as exc:
        setup_logging(level=args.log_level or "INFO", json_format=args.json_logs)
        logger.error("{}", exc.message)
        return EXIT_INPUT_ERROR

    setup_logging(
        level=args.log_level or settings.logging.level,
        json_format=args.json_logs or settings.logging.json_format,
        log_file=settings.logging.log_file,
    )

    overrides = {}
    if args.tolerance is not None:
        overrides["merge_tolerance"] = args.tolerance
    if args.min_area is not None:
        overrides["min_room_area"] = args.min_area
    try:
        config = settings.detection.with_overrides(**overrides)
    except SpaceDetectError as exc:
        logger.error("{}", exc.message)
        return EXIT_INPUT_ERROR

    try:
        walls = load_walls_file(args.walls)
    except SpaceDetectError as exc:
        logger.error("{}", exc.message)
        return EXIT_INPUT_ERROR

    validation = validate_walls(walls, tolerance=config.merge_tolerance)
    for warning in validation.warnings:
        logger.warning(warning)

    if args.point is not None:
        point = Point2D(x=args.point[0], y=args.point[1])
        space = detect_space_at_point(point, walls, config=config)
        result = {"space": space.model_dump(mode="json", by_alias=True) if space else None}
    else:
        spaces = detect_spaces(walls, tolerance=config.merge_tolerance, config=config)
        result = {"spaces": [s.model_dump(mode="json", by_alias=True) for s in spaces]}

    text = json.dumps(result, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Saved detection result to {args.output}")
    else:
        sys.stdout.write(text + "\n")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Wall payload parsing and pre-detection checks."""

from .input_validation import (
    WallValidationResult,
    load_walls_file,
    parse_walls,
    validate_walls,
)

__all__ = [
    "WallValidationResult",
    "load_walls_file",
    "parse_walls",
    "validate_walls",
]

"""Custom exception hierarchy for spacedetect.

The detectors themselves never raise for bad geometry; these errors belong to
the outer surfaces (configuration, wall payloads, CLI).
"""

from __future__ import annotations


class SpaceDetectError(Exception):
    """Base exception for all spacedetect-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SpaceDetectError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(SpaceDetectError):
    """Base class for validation errors."""
    pass


class WallInputError(ValidationError):
    """Raised when a wall payload cannot be parsed into wall segments."""
    pass


class GeometryError(SpaceDetectError):
    """Raised when a geometry cannot be used at all (e.g. a non-finite coordinate)."""
    pass

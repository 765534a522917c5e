from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from spacedetect.exceptions import ConfigurationError
from spacedetect.reconstruct.config import DetectionConfig

# Load .env file from the working directory
_env_path = Path.cwd() / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

CONFIG_ENV = "SPACEDETECT_CONFIG"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_format: bool = False
    log_file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


class Settings(BaseModel):
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from a YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                the SPACEDETECT_CONFIG environment variable, or built-in
                defaults when that is unset too.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file does not exist or is invalid.
        """
        if path is None:
            env_value = os.getenv(CONFIG_ENV)
            if not env_value:
                return cls()
            path = Path(env_value)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}", {"path": str(path)})
        try:
            with path.open("r", encoding="utf-8") as fp:
                payload = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file is not valid YAML: {path}", {"path": str(path)}) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {path}", {"path": str(path)})
        try:
            return cls(**payload)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "LoggingSettings",
    "get_settings",
    "CONFIG_ENV",
]

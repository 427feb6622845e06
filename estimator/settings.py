from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from estimator.exceptions import ConfigurationError
from estimator.models import (
    CanvasParams, CatalogOption, PricingConfig, ToolKindTable, WallSurface,
)

# Load .env file from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_env_path = _PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "config" / "default.yaml"


class StorageSettings(BaseModel):
    backend: Literal["memory", "file"] = "memory"
    root: Path = Path("data")


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    file: Path | None = None


class CatalogSettings(BaseModel):
    """Options served by the bundled in-memory catalog."""
    options: list[CatalogOption] = Field(default_factory=list)


class Settings(BaseModel):
    canvas: CanvasParams = Field(default_factory=CanvasParams)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    tools: ToolKindTable = Field(default_factory=ToolKindTable)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    # Walls created at startup when the repository does not have them yet
    walls: list[WallSurface] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from a YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                the ESTIMATOR_CONFIG environment variable or config/default.yaml.
                A missing default file yields the built-in defaults.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If an explicitly named file is missing or the
                configuration is invalid.
        """
        explicit = path or os.getenv("ESTIMATOR_CONFIG")
        config_path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH
        if not config_path.exists():
            if explicit:
                raise ConfigurationError(
                    f"Configuration file not found: {config_path}", {"path": str(config_path)},
                )
            return cls()
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        try:
            return cls(**payload)
        except (PydanticValidationError, TypeError) as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "StorageSettings",
    "LoggingSettings",
    "CatalogSettings",
    "get_settings",
]

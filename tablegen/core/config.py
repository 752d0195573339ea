"""Read-only user settings loaded from a YAML file."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import Dialect, ExportFormat, SchemaPreset


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TABLEGEN_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".tablegen" / "config.yaml"


class Settings(BaseModel):
    """User defaults and stored custom presets."""

    default_locale: str = Field(default="en", description="Locale for generated data")
    default_row_count: int = Field(default=100, gt=0, description="Rows when none are requested")
    default_batch_size: int = Field(default=1000, gt=0, description="Rows per insert transaction")
    default_export_format: ExportFormat = Field(default=ExportFormat.JSON)
    default_database: Dialect = Field(default=Dialect.SQLITE)
    null_probability: float = Field(default=0.0, ge=0.0, le=1.0)
    custom_presets: List[SchemaPreset] = Field(default_factory=list)

    @field_validator("custom_presets", mode="before")
    @classmethod
    def default_empty_presets(cls, v):
        return v or []


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path, then ``$TABLEGEN_CONFIG``, then ``~/.tablegen/config.yaml``."""
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings, falling back to defaults when the file does not exist."""
    config_path = resolve_config_path(path)

    if not config_path.exists():
        logger.debug(f"No settings file at {config_path}, using defaults")
        return Settings()

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {config_path} must contain a mapping")

    logger.info(f"Loaded settings from {config_path}")
    return Settings.model_validate(data)

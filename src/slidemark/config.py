"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:             str = "slidemark"
    short_item_length:    int = Field(default=80,  ge=1, description="Max average item length for a card-grid")
    title_max_length:     int = Field(default=240, ge=0, description="Max paragraph characters on a title slide")
    title_max_paragraphs: int = Field(default=2,   ge=0, description="Max paragraphs on a title slide")
    max_level:            int = Field(default=2,   ge=1, le=6, description="Deepest heading level that starts a new slide")
    output_dir:    str = Field(default="dist", description="Directory for mapped slide files")
    output_format: str = Field(default="json", pattern="^(json|yaml)$", description="json or yaml")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SLIDEMARK_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"SLIDEMARK_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

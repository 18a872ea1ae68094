"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "SITEMANIFEST_"


class Settings(BaseModel):
    app_name:         str = "sitemanifest"
    manifest_path:    str = Field(default="manifest.json", description="Where build writes the manifest JSON")
    output_dir:       str = Field(default="dist", description="Directory for emitted canonical Markdown")
    strict:           bool = Field(default=True, description="Abort on the first invalid document")
    precedence:       str = Field(default="last", pattern="^(first|last)$", description="Which duplicate revision wins")
    parser_config:    str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    read_attempts:    int = Field(default=3, ge=1, description="Read attempts per file on transient errors")
    read_backoff:     float = Field(default=0.1, ge=0, description="Initial retry delay in seconds, doubled per retry")
    read_workers:     int = Field(default=4, ge=1, description="Concurrent file reads")
    read_timeout:     float = Field(default=0, ge=0, description="Ingestion timeout in seconds; 0 disables")
    excerpt_length:   int = Field(default=200, ge=0, description="Max excerpt characters; 0 disables")
    words_per_minute: int = Field(default=200, ge=1, description="Reading speed for read_time")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SITEMANIFEST_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

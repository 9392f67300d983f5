"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from notemark.core.limits import CACHE_CAPACITY, Limits


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "NOTEMARK_"


class Settings(Limits):
    app_name:       str = "notemark"
    cache_capacity: int = Field(default=CACHE_CAPACITY, ge=1, description="Parse results kept in the LRU cache")
    log_level:      str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
                                description="Root log level for the CLI")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then NOTEMARK_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

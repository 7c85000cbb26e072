"""
Focus Area - Configuration

Loads the ``focus_area`` section of config.yaml and applies ``FOCUS_AREA_*``
environment overrides on top.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field

FOCUS_AREA_CHAR_LIMIT = 200
MAX_SIMPLE_NAMES = 100
MAX_USED_FULLY_QUALIFIED_NAMES = 25

# env var -> config field
ENV_OVERRIDES: Dict[str, str] = {
    "FOCUS_AREA_CHAR_LIMIT": "focus_area_char_limit",
    "FOCUS_AREA_MAX_SIMPLE_NAMES": "max_simple_names",
    "FOCUS_AREA_MAX_FQNS": "max_fully_qualified_names",
    "FOCUS_AREA_FINDER_TIMEOUT_SECONDS": "name_finder_timeout_seconds",
}


class FocusAreaConfig(BaseModel):
    """Budgets for focus-area extraction."""

    focus_area_char_limit: int = Field(default=FOCUS_AREA_CHAR_LIMIT, ge=1)
    max_simple_names: int = Field(default=MAX_SIMPLE_NAMES, ge=1)
    max_fully_qualified_names: int = Field(default=MAX_USED_FULLY_QUALIFIED_NAMES, ge=1)
    # None leaves timeout/cancellation to the caller
    name_finder_timeout_seconds: Optional[float] = Field(default=None, gt=0)


def _read_yaml_section(config_path: str) -> Dict[str, Any]:
    config_file = Path(config_path)
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return {}

    with open(config_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data.get("focus_area") or {}


def load_config(config_path: str = "config.yaml") -> FocusAreaConfig:
    """Load configuration from YAML, then environment variables."""
    values = dict(_read_yaml_section(config_path))

    for env_name, field_name in ENV_OVERRIDES.items():
        raw = (os.getenv(env_name) or "").strip()
        if raw:
            values[field_name] = raw

    config = FocusAreaConfig(**values)
    logger.debug(f"Focus area config: {config.model_dump()}")
    return config

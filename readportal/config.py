"""
Portal configuration.

Defaults live here; an optional YAML file (path argument, $READPORTAL_CONFIG,
or ./config.yaml) overrides them.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from readportal.errors import ConfigError
from readportal.utils import DATA_DIR, load_yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "READPORTAL_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.yaml")
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.yaml"


class PortalConfig(BaseModel):
    catalog_path: Path = DEFAULT_CATALOG_PATH

    # Dashboard slice boundaries, [start, end) over catalog order
    recent_count: int = Field(default=3, ge=0)
    in_progress_range: tuple[int, int] = (1, 3)
    completed_range: tuple[int, int] = (3, 5)

    # Simulated latency, seconds
    load_delay: float = Field(default=0.5, ge=0)
    remote_delay: float = Field(default=1.0, ge=0)
    remote_failure_rate: float = Field(default=0.0, ge=0, le=1)

    log_level: str = "INFO"

    @field_validator("in_progress_range", "completed_range")
    @classmethod
    def range_valid(cls, v):
        start, end = v
        if start < 0 or end < start:
            raise ValueError("Invalid range: must be [start, end) where 0 <= start <= end")
        return v


def load_config(path: Optional[Path] = None) -> PortalConfig:
    """
    Load configuration.

    Args:
        path: Explicit config file. Falls back to $READPORTAL_CONFIG, then
            ./config.yaml, then built-in defaults.

    Raises:
        ConfigError: If the file is missing (when given explicitly),
            unparsable, or fails validation
    """
    explicit = path or os.getenv(CONFIG_ENV_VAR)
    if explicit:
        config_path = Path(explicit)
    elif DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH
    else:
        logger.debug("No config file found, using defaults")
        return PortalConfig()

    try:
        data = load_yaml(config_path) or {}
    except (FileNotFoundError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")

    try:
        config = PortalConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    logger.info(f"Loaded config from {config_path}")
    return config

"""FDL configuration loading.

Settings come from a YAML file, looked up in this order:

- An explicit path passed to load_settings()
- The file named by the FDL_CONFIG environment variable
- The user config file (~/.config/fdl/config.yaml)

When none exists the built-in defaults are used. Example file:

    date_formats:
      - "%d/%m/%Y"
      - "%Y-%m-%d"
    pool_size: 8
    log_level: INFO
    pretty: 2
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .types import DEFAULT_DATE_FORMATS

__all__ = [
    "FDL_CONFIG",
    "USER_CONFIG_PATH",
    "Settings",
    "load_settings",
    "find_config_file",
]

logger = logging.getLogger(__name__)

# Environment variable naming a config file
FDL_CONFIG = "FDL_CONFIG"

USER_CONFIG_PATH = Path("~/.config/fdl/config.yaml")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Runtime settings for the API and command line."""
    date_formats: List[str] = field(default_factory=lambda: list(DEFAULT_DATE_FORMATS))
    pool_size: int = 40
    log_level: str = "WARNING"
    pretty: Optional[int] = 2       # JSON indent for printed bundles, None for compact

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from parsed YAML, validating every key."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        settings = cls()
        if "date_formats" in data:
            formats = data["date_formats"]
            if not isinstance(formats, list) or not all(isinstance(f, str) for f in formats):
                raise ValueError("date_formats must be a list of strings")
            if not formats:
                raise ValueError("date_formats must not be empty")
            settings.date_formats = list(formats)
        if "pool_size" in data:
            size = data["pool_size"]
            if isinstance(size, bool) or not isinstance(size, int) or size < 1:
                raise ValueError(f"pool_size must be a positive integer, got {size!r}")
            settings.pool_size = size
        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if level not in _LOG_LEVELS:
                raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
            settings.log_level = level
        if "pretty" in data:
            indent = data["pretty"]
            if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int)
                                       or indent < 0):
                raise ValueError(f"pretty must be a non-negative integer or null, got {indent!r}")
            settings.pretty = indent
        return settings


def find_config_file(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Return the config file to read, or None to use defaults.

    An explicit path, or one named by FDL_CONFIG, must exist.
    """
    if path is not None:
        candidate = Path(path).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    env_path = os.environ.get(FDL_CONFIG)
    if env_path:
        candidate = Path(env_path).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(f"Config file from {FDL_CONFIG} not found: {candidate}")
        return candidate

    user_path = USER_CONFIG_PATH.expanduser()
    if user_path.is_file():
        return user_path
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from YAML.

    Args:
        path: Optional explicit config file

    Returns:
        Settings, defaults where the file is silent

    Raises:
        FileNotFoundError: If an explicit or FDL_CONFIG file is missing
        ValueError: If the file is malformed or has unknown keys
    """
    config_file = find_config_file(path)
    if config_file is None:
        logger.debug("no config file found; using defaults.")
        return Settings()

    logger.debug("loading settings from %s", config_file)
    with open(config_file, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ValueError(f"{config_file} must contain a mapping of settings")
    return Settings.from_dict(data)

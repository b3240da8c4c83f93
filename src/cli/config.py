"""Configuration loading."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from sync_config import SyncConfig

CONFIG_BASENAME = "obsidian-sync"
CONFIG_SUFFIXES = (".json", ".yaml", ".yml")


def config_locations() -> list[Path]:
    """Project-level config first, then user-level."""
    locations = []
    for base in (Path.cwd() / ".claude", Path.home() / ".claude"):
        locations.extend(base / f"{CONFIG_BASENAME}{suffix}" for suffix in CONFIG_SUFFIXES)
    return locations


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    for loc in config_locations():
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> Optional[SyncConfig]:
    """Load configuration as a validated model.

    Returns None when no config file exists. JSON files parse as YAML.

    Raises:
        ValueError: On malformed files or failed validation.
    """
    path = config_path or find_config()
    if not path or not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    try:
        return SyncConfig.from_dict(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed: {e}")

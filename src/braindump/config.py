"""
Configuration management for Braindump.

Uses XDG base directories:
- Config: ~/.config/braindump/config.toml
- Data: ~/braindump/ (notes database)
"""

import copy
from pathlib import Path
from typing import Any
import os

from braindump.errors import ConfigError

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / "braindump"


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/braindump)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "braindump"


def get_braindump_home() -> Path:
    """Get the data directory (~/braindump or BRAINDUMP_HOME)."""
    if env_home := os.environ.get("BRAINDUMP_HOME"):
        return Path(env_home)
    return DEFAULT_DATA_HOME


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_db_path() -> Path:
    """Get the path to braindump.db."""
    return get_braindump_home() / "braindump.db"


def ensure_dirs() -> None:
    """Ensure all required directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_braindump_home().mkdir(parents=True, exist_ok=True)


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml, merged over the defaults.

    Returns default config if file doesn't exist.
    Raises ConfigError if the file is not valid TOML.
    """
    config_path = get_config_path()
    config = get_default_config()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    try:
        with open(config_path, "rb") as f:
            loaded = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    return merge_config(config, loaded)


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "braindump": {
            "home": str(get_braindump_home()),
        },
        "categorizer": {
            "fallback": "notatka",
            "confidence_divisor": 15,
        },
        # Per-category overrides: icon, extra keywords, replacement patterns
        "categories": {},
        "display": {
            "truncate": 60,
            "limit": 50,
        },
    }

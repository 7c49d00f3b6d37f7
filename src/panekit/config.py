"""Configuration management for Panekit."""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Use tomllib on Python 3.11+, fall back to tomli for 3.10
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from .layout import Layout, layout_from_dict, layout_to_dict
from .screen import LARGE_SCREEN_NAME, SMALL_SCREEN_NAME

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = SMALL_SCREEN_NAME
BUILTIN_PROFILES = (SMALL_SCREEN_NAME, LARGE_SCREEN_NAME)


@dataclass
class Config:
    """Panekit configuration."""

    default_profile: str = field(default=DEFAULT_PROFILE)
    debug_logging: bool = field(default=False)  # Enable debug logging to file (opt-in)
    restore_layouts: bool = field(default=True)  # Reopen profiles as they were left
    profiles: dict[str, Layout] = field(default_factory=dict)  # User-defined profiles


# Config file path
CONFIG_DIR = Path.home() / ".panekit"
CONFIG_FILE = CONFIG_DIR / "config.toml"


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes")


def _typed(data: dict[str, Any], key: str, expected: type, default: Any) -> Any:
    """Return ``data[key]`` if it has the expected type, else the default."""
    value = data.get(key, default)
    if not isinstance(value, expected):
        logger.warning(f"Ignoring {key} = {value!r}: expected {expected.__name__}")
        return default
    return value


def _load_profiles(data: dict[str, Any]) -> dict[str, Layout]:
    """Parse ``[profiles.<name>]`` tables, skipping invalid ones."""
    profiles: dict[str, Layout] = {}
    tables = data.get("profiles", {})
    if not isinstance(tables, dict):
        logger.warning(f"Ignoring profiles: expected a table, got {type(tables).__name__}")
        return profiles
    for name, table in tables.items():
        if name in BUILTIN_PROFILES:
            logger.warning(f"Ignoring profile {name!r}: name is reserved for a built-in profile")
            continue
        try:
            profiles[name] = layout_from_dict(table)
        except ValueError as e:
            logger.warning(f"Ignoring invalid profile {name!r}: {e}")
    return profiles


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from environment, file, or defaults.

    Priority (highest to lowest):
    1. Environment variables (PANEKIT_*)
    2. Config file (~/.panekit/config.toml)
    3. Hardcoded defaults
    """
    config_file = config_file or CONFIG_FILE
    config = Config()

    data = None
    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, OSError) as e:
            logger.warning(f"Failed to read config file {config_file}: {e}")

    if data is not None:
        config.default_profile = _typed(data, "default_profile", str, config.default_profile)
        config.debug_logging = _typed(data, "debug_logging", bool, config.debug_logging)
        config.restore_layouts = _typed(data, "restore_layouts", bool, config.restore_layouts)
        config.profiles = _load_profiles(data)

    # Environment variables override everything
    config.default_profile = os.getenv("PANEKIT_DEFAULT_PROFILE", config.default_profile)
    debug_logging_env = _env_flag("PANEKIT_DEBUG_LOGGING")
    if debug_logging_env is not None:
        config.debug_logging = debug_logging_env
    restore_layouts_env = _env_flag("PANEKIT_RESTORE_LAYOUTS")
    if restore_layouts_env is not None:
        config.restore_layouts = restore_layouts_env

    return config


def save_config(config: Config, config_file: Path | None = None) -> None:
    """Save configuration to file."""
    config_file = config_file or CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "default_profile": config.default_profile,
        "debug_logging": config.debug_logging,
        "restore_layouts": config.restore_layouts,
    }

    # Save profiles only when there are any
    if config.profiles:
        data["profiles"] = {name: layout_to_dict(layout) for name, layout in config.profiles.items()}

    with open(config_file, "wb") as f:
        tomli_w.dump(data, f)

"""Configuration getter functions."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .env_loader import load_global_config


def get_config(
    key: str,
    default: Any = None,
    config_path: Path | None = None,
    global_config: Mapping[str, Any] | None = None,
) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Global config file
    3. Default value

    Args:
        key: Configuration key
        default: Default value if not found
        config_path: Optional override for the global config file
        global_config: Already-loaded global config; the file is not read again

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check global config
    if global_config is None:
        global_config = load_global_config(config_path)
    if global_config.get(key) is not None:
        return global_config[key]

    # 3. Return default
    return default


def resolve_option(
    value: Any,
    key: str,
    default: Any = None,
    config_path: Path | None = None,
    global_config: Mapping[str, Any] | None = None,
) -> Any:
    """Return an explicit CLI value when given, otherwise fall back to get_config."""
    if value is not None:
        return value
    return get_config(
        key, default=default, config_path=config_path, global_config=global_config
    )

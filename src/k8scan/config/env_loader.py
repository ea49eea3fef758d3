"""Global configuration file loading."""

from pathlib import Path
from typing import Any

import yaml


def get_global_config_path() -> Path:
    """Return the path of the global config file (~/.k8scan/config.yml)."""
    return Path.home() / ".k8scan" / "config.yml"


def load_global_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load global configuration from ~/.k8scan/config.yml.

    Raises:
        ValueError: if the file is not valid YAML or not a mapping.
    """
    config_path = config_path or get_global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"{config_path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping, got {type(data).__name__}")
        return data
    return {}

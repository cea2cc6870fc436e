"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(__file__).parent


def load_yaml_config(filename: str | Path) -> dict[str, Any]:
    """Load a YAML config file.

    Relative names resolve against the config/ directory, so the bundled
    jurisdiction table is found regardless of the working directory.
    An absolute path is read as-is.
    """
    config_path = Path(filename)
    if not config_path.is_absolute():
        config_path = CONFIG_DIR / config_path
    with open(config_path) as f:
        return yaml.safe_load(f) or {}

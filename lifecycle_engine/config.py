"""
Configuration loading for the Lifecycle Engine.

Configuration is a plain dictionary: defaults merged with an optional
YAML or JSON file. The file path can also come from the
LIFECYCLE_ENGINE_CONFIG environment variable, and LIFECYCLE_ENGINE_STATE_DIR
overrides the record store directory.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LIFECYCLE_ENGINE_CONFIG"
STATE_DIR_ENV_VAR = "LIFECYCLE_ENGINE_STATE_DIR"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_CONFIG: Dict[str, Any] = {
    # None keeps records in memory only
    "state_dir": None,
    # None disables the JSON-lines audit journal
    "audit_dir": None,
    "log_level": "INFO",
    "api": {
        "host": "127.0.0.1",
        "port": 8000,
    },
}


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from file or use defaults.

    Args:
        path: YAML (.yaml/.yml) or JSON config file. Falls back to the
              LIFECYCLE_ENGINE_CONFIG environment variable.

    Returns:
        Configuration dictionary. LIFECYCLE_ENGINE_STATE_DIR, when set,
        overrides ``state_dir`` from the file.

    Raises:
        ConfigurationError: If the file has an unsupported extension or
            cannot be parsed
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = path or os.environ.get(CONFIG_ENV_VAR)
    if path:
        file_config = _read_config_file(Path(path))
        api_config = file_config.pop("api", None) or {}
        config.update(file_config)
        config["api"].update(api_config)

    state_dir = os.environ.get(STATE_DIR_ENV_VAR)
    if state_dir:
        config["state_dir"] = state_dir

    return config


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}; using defaults")
        return {}

    suffix = config_path.suffix.lower()
    try:
        with open(config_path, encoding="utf-8") as f:
            if suffix in (".yaml", ".yml"):
                file_config = yaml.safe_load(f) or {}
            elif suffix == ".json":
                file_config = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config format: {config_path}")
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        raise ConfigurationError(f"Could not read config {config_path}: {e}") from e

    if not isinstance(file_config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    logger.info(f"Loaded configuration from {config_path}")
    return file_config


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Set up root logging with the engine's format."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

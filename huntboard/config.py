"""
Configuration loader
"""
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from huntboard.models import Settings


logger = logging.getLogger(__name__)

VERSION = "1.0.0"

DEFAULT_CONFIG_PATH = "config/settings.yaml"
CONFIG_ENV_VAR = "HUNTBOARD_CONFIG"


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from a YAML file

    Args:
        config_path: Path to config file. Falls back to $HUNTBOARD_CONFIG,
                     then to config/settings.yaml.

    Returns:
        Settings object (built-in defaults when the default file is absent)

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit or DEFAULT_CONFIG_PATH)

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        logger.info(f"No config file at {path}, using defaults")
        return Settings()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    settings = Settings(**data)
    logger.info(f"Loaded settings from {path} (error_policy={settings.error_policy.value})")
    return settings

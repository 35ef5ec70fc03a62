from __future__ import annotations

"""
Configuration Domain Management.

Handles the default scan settings and their persistent storage as JSON in
the user data directory, with fallback to defaults on any read problem.
"""

import json
import logging
import os
from typing import Any, Dict

from treesizer.domain.constants import CURRENT_CONFIG_VERSION
from treesizer.infra.fs import get_user_data_dir, safe_mkdir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default scan configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Scan target
        "root_path": os.getcwd(),

        # Traversal
        "hidden_detection": "attribute",
        "max_workers": 1,

        # Diagnostics
        "collect_diagnostics": True,
        "diagnostics_path": "",

        # Logging
        "log_level": "INFO",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Keys unknown to the current schema are dropped. A missing or corrupted
    file yields the defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        logger.warning("Config 'settings' section is not an object. Using defaults.")
        return config

    for key, value in settings.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key: {key}")
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration with a version stamp.

    Args:
        config: Settings to save; unknown keys are not written.

    Returns:
        bool: True when the file was written.
    """
    defaults = get_default_config()
    settings = {k: v for k, v in config.items() if k in defaults}

    ok, err = safe_mkdir(os.path.dirname(CONFIG_FILE))
    if not ok:
        logger.error(f"Failed to create config directory: {err}")
        return False

    try:
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(
                {"version": CURRENT_CONFIG_VERSION, "settings": settings},
                f, ensure_ascii=False, indent=4,
            )
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {CONFIG_FILE}")
    return True

"""Configuration path helpers for plugin-installer."""

import os
from pathlib import Path

CONFIG_ENV_VAR = "PLUGIN_INSTALLER_CONFIG"


def get_config_dir() -> Path:
    """Return XDG-compliant config directory: ~/.config/plugin-installer"""
    return Path.home() / ".config" / "plugin-installer"


def get_config_path() -> Path:
    """Return path to user config file.

    Priority:
    1. PLUGIN_INSTALLER_CONFIG environment variable (if set)
    2. ~/.config/plugin-installer/config.yaml (default XDG location)
    """
    if CONFIG_ENV_VAR in os.environ:
        return Path(os.environ[CONFIG_ENV_VAR])
    return get_config_dir() / "config.yaml"

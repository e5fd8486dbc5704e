"""Dependency-ordered installation and uninstallation of plugins."""

import logging

from plugin_installer.config import (
    ComponentConfig,
    Config,
    ConfigError,
    load_config,
    validate_config,
)
from plugin_installer.discovery import DirectoryEnumerator, StaticEnumerator
from plugin_installer.errors import (
    CyclicDependencyError,
    PluginInstallerError,
    format_error,
    format_suggestion,
)
from plugin_installer.installer import (
    ApplicationContext,
    BaseInstaller,
    InstallerRegistry,
    MarkerInstaller,
    PluginInstaller,
)
from plugin_installer.loader import build_service, load_factory
from plugin_installer.messages import LoggingMessageSink, MessageSink
from plugin_installer.paths import get_config_dir, get_config_path
from plugin_installer.service import PluginInstallerService

__version__ = "0.1.0"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Configure root logging: DEBUG with --debug, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


__all__ = [
    "__version__",
    "setup_logging",
    "ApplicationContext",
    "BaseInstaller",
    "ComponentConfig",
    "Config",
    "ConfigError",
    "CyclicDependencyError",
    "DirectoryEnumerator",
    "InstallerRegistry",
    "LoggingMessageSink",
    "MarkerInstaller",
    "MessageSink",
    "PluginInstaller",
    "PluginInstallerError",
    "PluginInstallerService",
    "StaticEnumerator",
    "build_service",
    "format_error",
    "format_suggestion",
    "get_config_dir",
    "get_config_path",
    "load_config",
    "load_factory",
    "validate_config",
]

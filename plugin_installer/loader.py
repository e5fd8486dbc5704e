"""Builds an installer service from a validated config.

Components declared in the config become registry entries: the built-in
"marker" installer gets a MarkerInstaller bound to the component, and any
other installer is a "module:attribute" import path to a zero-argument
factory (usually a BaseInstaller subclass).
"""

import functools
import importlib
import logging
from typing import Any

from plugin_installer.config import ComponentConfig, Config, ConfigError
from plugin_installer.discovery import (
    ComponentEnumerator,
    DirectoryEnumerator,
    StaticEnumerator,
)
from plugin_installer.installer import (
    ApplicationContext,
    InstallerFactory,
    InstallerRegistry,
    MarkerInstaller,
)
from plugin_installer.messages import LoggingMessageSink, MessageSink
from plugin_installer.service import PluginInstallerService

_logging = logging.getLogger(__name__)


def load_factory(import_path: str) -> InstallerFactory:
    """Import the factory named by a 'module:attribute' path.

    Raises:
        ConfigError: If the module or attribute cannot be loaded, or the
            attribute is not callable
    """
    module_name, sep, attr_path = import_path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(
            f"Invalid installer path '{import_path}' (expected 'module:attribute')"
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import installer module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            raise ConfigError(
                f"Installer '{attr_path}' not found in module '{module_name}'"
            )

    if not callable(target):
        raise ConfigError(f"Installer '{import_path}' is not callable")
    _logging.debug(f"Loaded installer factory {import_path}")
    return target


def make_factory(component: ComponentConfig) -> InstallerFactory:
    if component.is_marker:
        return functools.partial(
            MarkerInstaller, component.component_id, component.dependencies
        )
    return load_factory(component.installer)


def build_registry(config: Config, context: ApplicationContext) -> InstallerRegistry:
    registry = InstallerRegistry(context=context)
    for component in config.components:
        registry.register(component.component_id, make_factory(component))
    return registry


def build_enumerator(config: Config) -> ComponentEnumerator:
    if config.universe_dir is not None:
        return DirectoryEnumerator(config.universe_dir)
    return StaticEnumerator(c.component_id for c in config.components)


def build_service(
    config: Config,
    messages: MessageSink | None = None,
    services: dict[str, Any] | None = None,
) -> PluginInstallerService:
    """Wire registry, context and enumerator into an installer service.

    Args:
        config: Validated configuration
        messages: Sink for progress messages; defaults to a LoggingMessageSink
            honoring the configured output levels
        services: Extra entries exposed to installers through the context

    Raises:
        ConfigError: If an installer factory cannot be loaded
    """
    if messages is None:
        messages = LoggingMessageSink(config.enabled_levels)

    context = ApplicationContext(
        application_dir=config.application_dir,
        messages=messages,
        services=dict(services or {}),
    )
    service = PluginInstallerService(
        registry=build_registry(config, context),
        enumerator=build_enumerator(config),
        messages=messages,
    )
    context.services.setdefault("plugin_installer", service)
    return service


__all__ = [
    "load_factory",
    "make_factory",
    "build_registry",
    "build_enumerator",
    "build_service",
]

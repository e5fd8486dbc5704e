"""Installer registration and resolution."""

import logging

from .base import BaseInstaller
from .models import (
    ApplicationContext,
    ComponentID,
    ContextAware,
    InstallerFactory,
    PluginInstaller,
)

_logging = logging.getLogger(__name__)


class InstallerRegistry:
    """Maps component IDs to installer instances.

    Factories are registered explicitly. The first resolve() of an ID
    instantiates its installer (injecting the context when the installer is
    context-aware), binds BaseInstaller instances to the ID they are
    registered under, and memoizes the result; an ID without a factory memoizes
    None, which simply means the component has no install-time logic.
    """

    def __init__(
        self,
        factories: dict[ComponentID, InstallerFactory] | None = None,
        context: ApplicationContext | None = None,
    ):
        self.context = context
        self._factories: dict[ComponentID, InstallerFactory] = {}
        self._installers: dict[ComponentID, PluginInstaller | None] = {}
        for component_id, factory in (factories or {}).items():
            self.register(component_id, factory)

    def register(self, component_id: ComponentID, factory: InstallerFactory) -> None:
        if component_id in self._factories:
            raise ValueError(f"An installer is already registered for '{component_id}'")
        self._factories[component_id] = factory
        self._installers.pop(component_id, None)

    def has_factory(self, component_id: ComponentID) -> bool:
        return component_id in self._factories

    @property
    def component_ids(self) -> list[ComponentID]:
        return list(self._factories)

    def resolve(self, component_id: ComponentID) -> PluginInstaller | None:
        if component_id not in self._installers:
            self._installers[component_id] = self._create(component_id)
        return self._installers[component_id]

    def _create(self, component_id: ComponentID) -> PluginInstaller | None:
        factory = self._factories.get(component_id)
        if factory is None:
            _logging.debug(f"No installer registered for {component_id}")
            return None

        instance = factory()
        if isinstance(instance, BaseInstaller):
            # the registered ID wins over a class-level or missing component_id
            instance.component_id = component_id
        if self.context is not None and isinstance(instance, ContextAware):
            instance.set_context(self.context)
        _logging.debug(
            f"Resolved installer {type(instance).__name__} for {component_id}"
        )
        return instance


__all__ = [
    "InstallerRegistry",
]

"""Lazily built cache of each component's direct dependencies."""

from .models import ComponentID
from .registry import InstallerRegistry


class DependencyCache:
    def __init__(self, registry: InstallerRegistry):
        self.registry = registry
        self._dependencies: dict[ComponentID, list[ComponentID]] = {}

    def dependencies_of(self, component_id: ComponentID) -> list[ComponentID]:
        """Return the declared direct dependencies of a component.

        The installer is queried once; order and duplicates are kept as
        declared. A component without an installer has no dependencies.
        """
        if component_id not in self._dependencies:
            installer = self.registry.resolve(component_id)
            if installer is None:
                self._dependencies[component_id] = []
            else:
                self._dependencies[component_id] = list(installer.get_dependencies())
        return self._dependencies[component_id]

    def __contains__(self, component_id: ComponentID) -> bool:
        return component_id in self._dependencies

    def __len__(self) -> int:
        return len(self._dependencies)


__all__ = [
    "DependencyCache",
]

"""Component enumeration.

The installer service asks an enumerator for every component ID known to the
application. Two enumerators are provided:

- StaticEnumerator returns a fixed list (the components declared in config)
- DirectoryEnumerator scans a universe directory laid out as
  <universe>/<group>/<component>/ and yields "group.component"
"""

import logging
from pathlib import Path
from typing import Iterable, Protocol

from plugin_installer.config import is_component_id

_logging = logging.getLogger(__name__)


class ComponentEnumerator(Protocol):
    def list_component_ids(self) -> list[str]: ...


class StaticEnumerator:
    def __init__(self, component_ids: Iterable[str]):
        self.component_ids = list(dict.fromkeys(component_ids))

    def list_component_ids(self) -> list[str]:
        return list(self.component_ids)


class DirectoryEnumerator:
    """Enumerates components from a directory tree.

    The scan runs once per enumerator; hidden directories and names that do
    not form a valid component id are ignored.
    """

    def __init__(self, universe_dir: Path):
        self.universe_dir = universe_dir
        self._component_ids: list[str] | None = None

    def list_component_ids(self) -> list[str]:
        if self._component_ids is None:
            self._component_ids = self._scan()
        return list(self._component_ids)

    def _scan(self) -> list[str]:
        if not self.universe_dir.is_dir():
            _logging.debug(f"Universe directory not found: {self.universe_dir}")
            return []

        component_ids = []
        for group_dir in _child_dirs(self.universe_dir):
            for component_dir in _child_dirs(group_dir):
                component_id = f"{group_dir.name}.{component_dir.name}"
                if is_component_id(component_id):
                    component_ids.append(component_id)
                else:
                    _logging.debug(f"Skipping {component_dir}: not a component name")
        return component_ids


def _child_dirs(path: Path) -> list[Path]:
    return sorted(
        d for d in path.iterdir() if d.is_dir() and not d.name.startswith(".")
    )


__all__ = [
    "ComponentEnumerator",
    "StaticEnumerator",
    "DirectoryEnumerator",
]

"""Base classes for component installers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from plugin_installer.errors import PluginInstallerError
from plugin_installer.messages import DEBUG, INFO, WARNING

from .models import ApplicationContext, ComponentID

MARKERS_DIR = ".installed"


class BaseInstaller(ABC):
    """Abstract base class for component installers.

    Subclasses implement install(), uninstall() and is_installed(), and list
    the components they need in the `dependencies` class attribute (or
    override get_dependencies()). The registry sets `component_id` to the ID
    the installer is registered under and hands over the application context
    right after construction.
    """

    component_id: ComponentID = ""
    dependencies: ClassVar[tuple[ComponentID, ...]] = ()

    def __init__(self, component_id: ComponentID | None = None):
        if component_id is not None:
            self.component_id = component_id
        self.context: ApplicationContext | None = None

    def set_context(self, context: ApplicationContext) -> None:
        self.context = context

    @abstractmethod
    def install(self) -> None:
        pass

    @abstractmethod
    def uninstall(self) -> None:
        pass

    @abstractmethod
    def is_installed(self) -> bool:
        pass

    def get_dependencies(self) -> list[ComponentID]:
        return list(self.dependencies)

    @property
    def name(self) -> ComponentID:
        return self.component_id or type(self).__name__

    def require_context(self) -> ApplicationContext:
        if self.context is None:
            raise PluginInstallerError(
                f"Installer for {self.name} has no application context"
            )
        return self.context

    def debug_msg(self, msg: str) -> None:
        self.message(msg, DEBUG)

    def info_msg(self, msg: str) -> None:
        self.message(msg, INFO)

    def warning_msg(self, msg: str) -> None:
        self.message(msg, WARNING)

    def message(self, msg: str, level: str = INFO) -> None:
        # messages written before the context arrives are dropped
        if self.context is not None:
            self.context.messages.message_from_plugin(self.name, msg, level)


class MarkerInstaller(BaseInstaller):
    """Tracks installation with a marker file under the application dir.

    Used for components declared in the config without custom install logic:
    installing writes <application_dir>/.installed/<component_id>, and
    uninstalling removes it.
    """

    def __init__(
        self,
        component_id: ComponentID,
        dependencies: list[ComponentID] | tuple[ComponentID, ...] = (),
    ):
        super().__init__(component_id)
        self._dependencies = list(dependencies)

    def get_dependencies(self) -> list[ComponentID]:
        return list(self._dependencies)

    @property
    def marker_path(self) -> Path:
        return self.require_context().application_dir / MARKERS_DIR / self.name

    def install(self) -> None:
        path = self.marker_path
        self.debug_msg(f"writing marker {path}.")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.name + "\n", encoding="utf-8")

    def uninstall(self) -> None:
        path = self.marker_path
        if path.exists():
            self.debug_msg(f"removing marker {path}.")
            path.unlink()
        else:
            self.debug_msg("no marker to remove.")

    def is_installed(self) -> bool:
        return self.marker_path.exists()


__all__ = [
    "BaseInstaller",
    "MarkerInstaller",
    "MARKERS_DIR",
]

"""Data models and capability contracts for installers."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

from plugin_installer.messages import LoggingMessageSink, MessageSink

ComponentID = str


@runtime_checkable
class PluginInstaller(Protocol):
    """Install-time logic for one component."""

    def install(self) -> None: ...

    def uninstall(self) -> None: ...

    def is_installed(self) -> bool: ...

    def get_dependencies(self) -> list[ComponentID]: ...


@runtime_checkable
class ContextAware(Protocol):
    """Installers implementing this receive the shared application context."""

    def set_context(self, context: "ApplicationContext") -> None: ...


InstallerFactory = Callable[[], PluginInstaller]

INSTALL = "install"
UNINSTALL = "uninstall"


@dataclass
class ApplicationContext:
    """State shared with every context-aware installer."""
    application_dir: Path
    messages: MessageSink = field(default_factory=LoggingMessageSink)
    services: dict[str, Any] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.services

    def get(self, name: str) -> Any:
        if name not in self.services:
            raise KeyError(f"Service '{name}' is not registered in the context")
        return self.services[name]


@dataclass
class PlanStep:
    component_id: ComponentID
    installable: bool
    installed: bool
    will_run: bool

    @property
    def skip_reason(self) -> str | None:
        if self.will_run:
            return None
        if not self.installable:
            return "no installer"
        return "already installed"


@dataclass
class Plan:
    action: str
    target: ComponentID
    steps: list[PlanStep]
    force: bool = False

    @property
    def component_ids(self) -> list[ComponentID]:
        return [step.component_id for step in self.steps]

    @property
    def runnable_steps(self) -> list[PlanStep]:
        return [step for step in self.steps if step.will_run]


__all__ = [
    "ComponentID",
    "PluginInstaller",
    "ContextAware",
    "InstallerFactory",
    "ApplicationContext",
    "INSTALL",
    "UNINSTALL",
    "PlanStep",
    "Plan",
]

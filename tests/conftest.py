"""Pytest fixtures and utilities for plugin_installer tests."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from plugin_installer.discovery import StaticEnumerator
from plugin_installer.installer import InstallerRegistry
from plugin_installer.messages import MESSAGE_LEVELS, FilteringSink
from plugin_installer.service import PluginInstallerService


class RecordingMessageSink(FilteringSink):
    """Keeps (level, message) pairs in memory; every level enabled by default."""

    def __init__(self, levels=None):
        super().__init__(MESSAGE_LEVELS if levels is None else levels)
        self.records: list[tuple[str, str]] = []

    def emit(self, msg: str, level: str) -> None:
        self.records.append((level, msg))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]


class FakeInstaller:
    """Installer double that records every action in a shared call log."""

    def __init__(
        self,
        component_id: str,
        dependencies=(),
        installed: bool = False,
        calls: list | None = None,
        fail_on: str | None = None,
    ):
        self.component_id = component_id
        self.dependencies = list(dependencies)
        self.installed = installed
        self.calls = calls if calls is not None else []
        self.fail_on = fail_on
        self.dependency_queries = 0
        self.status_queries = 0

    def install(self) -> None:
        self.calls.append(("install", self.component_id))
        if self.fail_on == "install":
            raise RuntimeError(f"install of {self.component_id} failed")
        self.installed = True

    def uninstall(self) -> None:
        self.calls.append(("uninstall", self.component_id))
        if self.fail_on == "uninstall":
            raise RuntimeError(f"uninstall of {self.component_id} failed")
        self.installed = False

    def is_installed(self) -> bool:
        self.status_queries += 1
        return self.installed

    def get_dependencies(self) -> list[str]:
        self.dependency_queries += 1
        return list(self.dependencies)


class GraphHarness:
    """A service wired to FakeInstallers built from a dependency graph."""

    def __init__(
        self,
        graph: dict[str, list[str]],
        installed=(),
        without_installer=(),
        fail_on: dict[str, str] | None = None,
    ):
        self.calls: list[tuple[str, str]] = []
        self.installers: dict[str, FakeInstaller] = {}
        self.messages = RecordingMessageSink()
        fail_on = fail_on or {}

        self.registry = InstallerRegistry()
        for component_id, dependencies in graph.items():
            if component_id in without_installer:
                continue
            installer = FakeInstaller(
                component_id,
                dependencies,
                installed=component_id in installed,
                calls=self.calls,
                fail_on=fail_on.get(component_id),
            )
            self.installers[component_id] = installer
            self.registry.register(component_id, lambda i=installer: i)

        self.service = PluginInstallerService(
            registry=self.registry,
            enumerator=StaticEnumerator(graph),
            messages=self.messages,
        )

    def actions(self, action: str) -> list[str]:
        return [cid for act, cid in self.calls if act == action]


@pytest.fixture
def graph_harness():
    """Factory building a GraphHarness from {component: [dependencies]}."""

    def _create(graph, **kwargs):
        return GraphHarness(graph, **kwargs)

    return _create


@pytest.fixture
def fake_installer_class():
    return FakeInstaller


@pytest.fixture
def recording_sink() -> RecordingMessageSink:
    return RecordingMessageSink()


@pytest.fixture
def chain_graph() -> dict[str, list[str]]:
    """a depends on b, b depends on c."""
    return {
        "app.a": ["app.b"],
        "app.b": ["app.c"],
        "app.c": [],
    }


@pytest.fixture
def diamond_graph() -> dict[str, list[str]]:
    """a depends on b and c, both of which depend on d."""
    return {
        "app.a": ["app.b", "app.c"],
        "app.b": ["app.d"],
        "app.c": ["app.d"],
        "app.d": [],
    }


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_config(temp_dir: Path):
    """Write a YAML config into the temp dir and return its path."""

    def _write(text: str, name: str = "config.yaml") -> Path:
        path = temp_dir / name
        path.write_text(text)
        return path

    return _write

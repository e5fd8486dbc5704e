"""Install/uninstall orchestration over computed dependency orders.

PluginInstallerService owns every cache the engine needs (installer registry,
dependency cache, reverse dependency index) for its own lifetime. It is not
thread-safe; callers needing concurrency must serialize access to it.

Failure policy: nothing is recovered locally. A cyclic dependency aborts an
install before any installer runs; an exception raised by an installer
propagates unchanged and the components processed before it keep their new
state.
"""

from plugin_installer.discovery import ComponentEnumerator
from plugin_installer.installer import (
    INSTALL,
    UNINSTALL,
    ComponentID,
    CycleDetector,
    DependencyCache,
    InstallerRegistry,
    Plan,
    PlanStep,
    PluginInstaller,
    build_reverse_index,
    plan_install,
    plan_uninstall,
)
from plugin_installer.messages import DEBUG, INFO, LoggingMessageSink, MessageSink


class PluginInstallerService:
    def __init__(
        self,
        registry: InstallerRegistry,
        enumerator: ComponentEnumerator,
        messages: MessageSink | None = None,
    ):
        self.registry = registry
        self.enumerator = enumerator
        self.messages = messages or LoggingMessageSink()
        self.dependencies = DependencyCache(registry)
        self.detector = CycleDetector()
        self._reverse_index: dict[ComponentID, list[ComponentID]] | None = None

    def get_installer(self, component_id: ComponentID) -> PluginInstaller | None:
        return self.registry.resolve(component_id)

    def list_component_ids(self) -> list[ComponentID]:
        return self.enumerator.list_component_ids()

    def is_installable(self, component_id: ComponentID) -> bool:
        return self.get_installer(component_id) is not None

    def is_installed(self, component_id: ComponentID) -> bool:
        """Return whether the component is installed.

        A component without an installer has nothing to install and is
        therefore always considered installed.
        """
        installer = self.get_installer(component_id)
        if installer is not None:
            return installer.is_installed()
        return True

    def plan_install(self, target: ComponentID) -> list[ComponentID]:
        """Return target's install order; raises CyclicDependencyError."""
        self.detector.reset()
        return plan_install(target, self.dependencies.dependencies_of, self.detector)

    def plan_uninstall(self, target: ComponentID) -> list[ComponentID]:
        return plan_uninstall(target, self.reverse_index)

    @property
    def reverse_index(self) -> dict[ComponentID, list[ComponentID]]:
        # built once over every known component
        if self._reverse_index is None:
            self._reverse_index = build_reverse_index(
                self.list_component_ids(), self.dependencies.dependencies_of
            )
        return self._reverse_index

    def install(self, target: ComponentID, force: bool = False) -> None:
        """Install target and everything it depends on, dependencies first.

        Components that are already installed are skipped unless force is set.
        """
        self.messages.message(f'Calling "install" method with {target}.')

        self.messages.message(f"Creating install map for {target}...", DEBUG)
        install_map = self.plan_install(target)
        total = len(install_map)
        self.messages.message(f"...{total} component(s) to install.", DEBUG)

        for current, component_id in enumerate(install_map, 1):
            self.messages.message(
                f"{target} ({current}/{total}): -> installing {component_id}.", DEBUG
            )
            installer = self.get_installer(component_id)
            if installer is None:
                self.messages.message(f"{component_id}: no installer, skip.", DEBUG)
            elif force or not installer.is_installed():
                installer.install()
                self.messages.message(f"{component_id}: was installed.", DEBUG)
            else:
                self.messages.message(
                    f"{component_id}: was already installed, skipping.", DEBUG
                )

    def uninstall(self, target: ComponentID) -> None:
        """Uninstall target after everything that depends on it.

        Every resolvable installer in the plan is called, whether or not it
        reports being installed.
        """
        self.messages.message(f'Calling "uninstall" method with {target}.')

        self.messages.message(f"Creating uninstall map for {target}...", DEBUG)
        uninstall_map = self.plan_uninstall(target)
        total = len(uninstall_map)
        self.messages.message(f"...{total} component(s) to uninstall.", DEBUG)

        for current, component_id in enumerate(uninstall_map, 1):
            self.messages.message(
                f"{target} ({current}/{total}): -> uninstalling {component_id}.", DEBUG
            )
            installer = self.get_installer(component_id)
            if installer is None:
                self.messages.message(f"{component_id}: no installer, skip.", DEBUG)
                continue
            installer.uninstall()
            self.messages.message(f"{component_id}: was uninstalled.", DEBUG)

    def install_all(self, force: bool = False) -> None:
        self.messages.message('Calling "install_all" method.')
        for component_id in self.list_component_ids():
            installer = self.get_installer(component_id)
            if installer is None:
                continue
            if force or not installer.is_installed():
                self.install(component_id, force=force)

    def uninstall_all(self) -> None:
        self.messages.message('Calling "uninstall_all" method.')
        for component_id in self.list_component_ids():
            self.uninstall(component_id)

    def message_from_plugin(
        self, component_id: ComponentID, msg: str, level: str = INFO
    ) -> None:
        self.messages.message_from_plugin(component_id, msg, level)

    def describe_plan(
        self, target: ComponentID, action: str = INSTALL, force: bool = False
    ) -> Plan:
        """Compute a plan without running it, annotated with what would run."""
        if action == INSTALL:
            component_ids = self.plan_install(target)
        elif action == UNINSTALL:
            component_ids = self.plan_uninstall(target)
        else:
            raise ValueError(f"Unknown plan action: '{action}'")

        steps = []
        for component_id in component_ids:
            installable = self.is_installable(component_id)
            installed = self.is_installed(component_id)
            if action == INSTALL:
                will_run = installable and (force or not installed)
            else:
                will_run = installable
            steps.append(
                PlanStep(
                    component_id=component_id,
                    installable=installable,
                    installed=installed,
                    will_run=will_run,
                )
            )
        return Plan(action=action, target=target, steps=steps, force=force)


__all__ = [
    "PluginInstallerService",
]

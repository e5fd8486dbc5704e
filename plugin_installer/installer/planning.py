"""Install and uninstall order planning, and plan rendering."""

from typing import Callable, Iterable

from plugin_installer.errors import CyclicDependencyError

from .cycles import CycleDetector
from .models import INSTALL, ComponentID, Plan

DependencyLookup = Callable[[ComponentID], list[ComponentID]]


def dedupe(component_ids: Iterable[ComponentID]) -> list[ComponentID]:
    """Drop repeated IDs, keeping each ID at its first occurrence."""
    return list(dict.fromkeys(component_ids))


def plan_install(
    target: ComponentID,
    dependencies_of: DependencyLookup,
    detector: CycleDetector,
) -> list[ComponentID]:
    """Return the components to install for target, dependencies first.

    Post-order depth-first walk: every dependency is appended before the
    component that declares it. Each edge is handed to the detector before the
    walk descends into it, so a cyclic chain raises CyclicDependencyError
    instead of recursing forever.

    Subtrees that were already fully walked are not walked again. Their edges
    are still registered, and since their components already sit earlier in
    the sequence the deduplicated result is the same.
    """
    install_map: list[ComponentID] = []
    expanded: set[ComponentID] = set()

    def collect(component_id: ComponentID) -> None:
        for dependency in dependencies_of(component_id):
            if not detector.add_edge(component_id, dependency):
                raise detector.conflict.to_error()
            if dependency not in expanded:
                collect(dependency)
        install_map.append(component_id)
        expanded.add(component_id)

    collect(target)
    return dedupe(install_map)


def build_reverse_index(
    component_ids: Iterable[ComponentID],
    dependencies_of: DependencyLookup,
) -> dict[ComponentID, list[ComponentID]]:
    """Map each component to the components that directly depend on it.

    Dependents are listed in the order component_ids yields them, each at most
    once per dependency.
    """
    index: dict[ComponentID, list[ComponentID]] = {}
    for component_id in dedupe(component_ids):
        for dependency in dedupe(dependencies_of(component_id)):
            index.setdefault(dependency, []).append(component_id)
    return index


def plan_uninstall(
    target: ComponentID,
    reverse_index: dict[ComponentID, list[ComponentID]],
) -> list[ComponentID]:
    """Return the components to uninstall for target, dependents first.

    Everything that depends on target, directly or transitively, comes before
    what it depends on, and target itself comes last.
    """
    uninstall_map: list[ComponentID] = []
    collected: set[ComponentID] = set()
    path: list[ComponentID] = []

    def collect(component_id: ComponentID) -> None:
        path.append(component_id)
        for dependent in reverse_index.get(component_id, []):
            if dependent in path:
                # chain in "depends on" direction, e.g. c -> a -> b -> c
                loop = path[path.index(dependent):]
                raise CyclicDependencyError(
                    dependent, [dependent] + list(reversed(loop))
                )
            if dependent in collected:
                continue
            collect(dependent)
            uninstall_map.append(dependent)
            collected.add(dependent)
        path.pop()

    collect(target)
    uninstall_map.append(target)
    return dedupe(uninstall_map)


def render_plan(plan: Plan) -> str:
    title = "Installation" if plan.action == INSTALL else "Uninstallation"
    lines = [f"{title} Plan: {plan.target}", ""]
    if plan.force:
        lines.append("⚠️  --force: installed components are installed again")
        lines.append("")

    lines.append("Steps:")
    for i, step in enumerate(plan.steps, 1):
        if step.will_run:
            lines.append(f"  {i}. 🟢 {step.component_id}")
        else:
            icon = "⚪" if not step.installable else "✅"
            lines.append(f"  {i}. {icon} {step.component_id} ({step.skip_reason}, skip)")

    runnable = len(plan.runnable_steps)
    lines.append("")
    lines.append(f"{runnable} of {len(plan.steps)} component(s) to {plan.action}.")
    return "\n".join(lines)


__all__ = [
    "dedupe",
    "plan_install",
    "build_reverse_index",
    "plan_uninstall",
    "render_plan",
]

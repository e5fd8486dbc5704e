"""Installer engine: registry, dependency ordering and installer contracts."""

from .base import MARKERS_DIR, BaseInstaller, MarkerInstaller
from .cycles import CycleConflict, CycleDetector
from .dependencies import DependencyCache
from .models import (
    INSTALL,
    UNINSTALL,
    ApplicationContext,
    ComponentID,
    ContextAware,
    InstallerFactory,
    Plan,
    PlanStep,
    PluginInstaller,
)
from .planning import (
    build_reverse_index,
    dedupe,
    plan_install,
    plan_uninstall,
    render_plan,
)
from .registry import InstallerRegistry

__all__ = [
    "ComponentID",
    "PluginInstaller",
    "ContextAware",
    "InstallerFactory",
    "ApplicationContext",
    "INSTALL",
    "UNINSTALL",
    "Plan",
    "PlanStep",
    "BaseInstaller",
    "MarkerInstaller",
    "MARKERS_DIR",
    "InstallerRegistry",
    "DependencyCache",
    "CycleConflict",
    "CycleDetector",
    "dedupe",
    "plan_install",
    "build_reverse_index",
    "plan_uninstall",
    "render_plan",
]

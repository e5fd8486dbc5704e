"""Incremental cycle detection over dependency edges."""

from dataclasses import dataclass

from plugin_installer.errors import CyclicDependencyError

from .models import ComponentID


@dataclass
class CycleConflict:
    culprit: ComponentID
    chain: list[ComponentID]

    def to_error(self) -> CyclicDependencyError:
        return CyclicDependencyError(self.culprit, self.chain)


class CycleDetector:
    """Accumulates "depends on" edges and refuses the ones that close a cycle.

    The dependency graph is only revealed as installers are queried, so every
    edge is checked against the edges seen so far before the planner recurses
    into it.
    """

    def __init__(self):
        self._edges: dict[ComponentID, list[ComponentID]] = {}
        self.conflict: CycleConflict | None = None

    def reset(self) -> None:
        self._edges = {}
        self.conflict = None

    def add_edge(self, source: ComponentID, target: ComponentID) -> bool:
        """Record that source depends on target.

        Returns False, without recording the edge, when target already leads
        back to source. The rejected chain is then available as `conflict`,
        starting and ending with target.
        """
        path = self._find_path(target, source)
        if path is not None:
            self.conflict = CycleConflict(culprit=target, chain=path + [target])
            return False
        self._edges.setdefault(source, []).append(target)
        return True

    def has_cyclic_error(self) -> bool:
        return self.conflict is not None

    def edges(self) -> list[tuple[ComponentID, ComponentID]]:
        return [(s, t) for s, targets in self._edges.items() for t in targets]

    def _find_path(
        self, start: ComponentID, goal: ComponentID
    ) -> list[ComponentID] | None:
        if start == goal:
            return [start]

        # iterative DFS, parents double as the visited set
        parents: dict[ComponentID, ComponentID | None] = {start: None}
        stack = [start]
        while stack:
            node = stack.pop()
            for nxt in self._edges.get(node, []):
                if nxt in parents:
                    continue
                parents[nxt] = node
                if nxt == goal:
                    path = [nxt]
                    while parents[path[-1]] is not None:
                        path.append(parents[path[-1]])
                    return list(reversed(path))
                stack.append(nxt)
        return None


__all__ = [
    "CycleConflict",
    "CycleDetector",
]

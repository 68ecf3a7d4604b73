"""
Cycle detection over a dependency graph.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum

from .errors import CycleDetectedError
from .model import ComponentKey, DependencyGraph

logger = logging.getLogger(__name__)


class _Color(Enum):
    WHITE = 0  # Not visited
    GRAY = 1  # On the current DFS path
    BLACK = 2  # Completely processed


class CycleDetector:
    """Three-color depth-first search that reports the first cycle it finds."""

    def __init__(self, graph: DependencyGraph):
        self._graph = graph

    def find_cycle(self) -> list[ComponentKey] | None:
        """
        Search every vertex for a directed cycle.

        Returns:
            The cycle as a path whose first vertex is repeated at the end,
            e.g. ``[A, B, A]``, or None if the graph is acyclic.
        """
        colors: dict[ComponentKey, _Color] = {}

        for start in self._graph:
            if colors.get(start, _Color.WHITE) is not _Color.WHITE:
                continue

            path = [start]
            colors[start] = _Color.GRAY
            stack: list[tuple[ComponentKey, Iterator[ComponentKey]]] = [
                (start, iter(self._graph.dependencies_of(start)))
            ]

            while stack:
                key, children = stack[-1]
                for child in children:
                    color = colors.get(child, _Color.WHITE)
                    if color is _Color.GRAY:
                        return path[path.index(child) :] + [child]
                    if color is _Color.WHITE:
                        colors[child] = _Color.GRAY
                        path.append(child)
                        stack.append((child, iter(self._graph.dependencies_of(child))))
                        break
                else:
                    colors[key] = _Color.BLACK
                    path.pop()
                    stack.pop()

        return None

    def has_cycle(self) -> bool:
        return self.find_cycle() is not None

    def check(self) -> None:
        """Raise CycleDetectedError if the graph contains a cycle."""
        cycle = self.find_cycle()
        if cycle is not None:
            raise CycleDetectedError(cycle, self._graph.describe())
        logger.debug("No cycles among %d components", len(self._graph))

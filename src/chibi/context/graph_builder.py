"""
Dependency graph formation from component descriptors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .errors import DuplicateComponentError, UnresolvedDependencyError
from .model import ComponentDescriptor, ComponentKey, DependencyGraph

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Builds a DependencyGraph from the full set of recognised components."""

    def __init__(self, descriptors: Iterable[ComponentDescriptor]):
        self._descriptors: dict[ComponentKey, ComponentDescriptor] = {}
        names: dict[str, ComponentKey] = {}
        for descriptor in descriptors:
            key = descriptor.key
            if key in self._descriptors:
                raise DuplicateComponentError(key)
            # qualified names are unique across keys
            if key.name in names:
                raise DuplicateComponentError(key, names[key.name])
            names[key.name] = key
            self._descriptors[key] = descriptor

    @property
    def descriptors(self) -> dict[ComponentKey, ComponentDescriptor]:
        return dict(self._descriptors)

    def build(self) -> DependencyGraph:
        """
        Walk every descriptor depth-first and collect its edges.

        Returns:
            The graph, with one vertex per descriptor in input order.

        Raises:
            UnresolvedDependencyError: If a dependency is not a recognised component.
        """
        graph = DependencyGraph()
        for key in self._descriptors:
            graph.add_vertex(key)
            self._walk(key, graph)
        logger.debug("Built dependency graph: %s", graph)
        return graph

    def _walk(self, root: ComponentKey, graph: DependencyGraph) -> None:
        # An edge seen before is skipped on its own; the remaining
        # dependencies of the same component are still visited.
        stack: list[tuple[ComponentKey, Iterator[ComponentKey]]] = [
            (root, iter(self._descriptors[root].dependencies))
        ]
        while stack:
            source, dependencies = stack[-1]
            for dependency in dependencies:
                if dependency not in self._descriptors:
                    raise UnresolvedDependencyError(dependency, source)
                if graph.has_edge(source, dependency):
                    continue
                graph.add_edge(source, dependency)
                logger.debug("Edge %s -> %s", source, dependency)
                stack.append((dependency, iter(self._descriptors[dependency].dependencies)))
                break
            else:
                stack.pop()

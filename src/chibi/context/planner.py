"""
Construction planning: strategy selection and dependency-first ordering.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from .errors import AmbiguousConstructorError, ConstructionFailedError
from .model import (
    ComponentDescriptor,
    ComponentKey,
    ConstructionStrategy,
    DependencyGraph,
    Plan,
    StrategyKind,
)

logger = logging.getLogger(__name__)


class InstantiationOrderer:
    """Derives a construction order in which dependencies precede dependents."""

    def __init__(self, graph: DependencyGraph):
        self._graph = graph

    def order(self) -> list[ComponentKey]:
        """Order every vertex, visiting graph entries in discovery order."""
        ordered: list[ComponentKey] = []
        done: set[ComponentKey] = set()
        for key in self._graph:
            self._visit(key, ordered, done)
        return ordered

    def order_for(self, root: ComponentKey) -> list[ComponentKey]:
        """Order the transitive dependencies of ``root``, ending with ``root`` itself."""
        ordered: list[ComponentKey] = []
        self._visit(root, ordered, set())
        return ordered

    def _visit(self, root: ComponentKey, ordered: list[ComponentKey], done: set[ComponentKey]) -> None:
        # Post-order walk; dependencies are taken last-declared first.
        # The graph is acyclic here, so a key is never pushed twice on one path.
        if root in done:
            return
        stack: list[tuple[ComponentKey, Iterator[ComponentKey]]] = [
            (root, reversed(self._graph.dependencies_of(root)))
        ]
        while stack:
            key, dependencies = stack[-1]
            for dependency in dependencies:
                if dependency not in done:
                    stack.append((dependency, reversed(self._graph.dependencies_of(dependency))))
                    break
            else:
                stack.pop()
                if key not in done:
                    done.add(key)
                    ordered.append(key)


class Planner:
    """Turns a validated graph and its descriptors into an executable Plan."""

    def __init__(self, graph: DependencyGraph, descriptors: Mapping[ComponentKey, ComponentDescriptor]):
        self._graph = graph
        self._descriptors = descriptors

    def plan(self) -> Plan:
        """
        Select a construction strategy for every component and order them.

        Strategies are chosen before anything is instantiated, so an
        ambiguous or unusable component fails the build without side effects.

        Returns:
            A Plan covering every component of the graph.
        """
        strategies = {
            key: self.select_strategy(self._descriptors[key]) for key in self._graph
        }
        order = InstantiationOrderer(self._graph).order()
        return Plan(self._graph, self._descriptors, strategies, tuple(order))

    @staticmethod
    def select_strategy(descriptor: ComponentDescriptor) -> ConstructionStrategy:
        """
        Pick how ``descriptor`` will be built.

        A constructor whose parameters exactly match the non-empty dependency
        list is used directly; otherwise the parameterless constructor is
        called and the injection points are assigned afterwards.

        Raises:
            AmbiguousConstructorError: If more than one constructor is marked injecting.
            ConstructionFailedError: If no parameterless constructor is available
                for field injection.
        """
        injecting = descriptor.injecting_constructors
        if len(injecting) > 1:
            raise AmbiguousConstructorError(descriptor.key, injecting)

        if descriptor.dependencies:
            plain = [c for c in descriptor.constructors if not c.injecting]
            for constructor in injecting + plain:
                if constructor.parameters == descriptor.dependencies:
                    strategy = ConstructionStrategy(
                        StrategyKind.CONSTRUCTOR, constructor, descriptor.injection_points
                    )
                    logger.debug("%s will be built with %s", descriptor.key, strategy)
                    return strategy

        for constructor in descriptor.constructors:
            if constructor.is_parameterless:
                strategy = ConstructionStrategy(
                    StrategyKind.FIELDS, constructor, descriptor.injection_points
                )
                logger.debug("%s will be built with %s", descriptor.key, strategy)
                return strategy

        raise ConstructionFailedError(descriptor.key, "no parameterless constructor available")

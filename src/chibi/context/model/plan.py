"""
Plan - a validated, ready to execute description of how to build every component.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .descriptor import ComponentDescriptor, Constructor, InjectionPoint
from .graph import DependencyGraph
from .keys import ComponentKey


class StrategyKind(Enum):
    """How a component gets its dependencies."""

    CONSTRUCTOR = "constructor"
    FIELDS = "fields"


@dataclass(frozen=True)
class ConstructionStrategy:
    """The constructor to call for a component and the attributes to assign afterwards."""

    kind: StrategyKind
    constructor: Constructor
    injection_points: tuple[InjectionPoint, ...] = ()

    def arguments(self) -> tuple[ComponentKey, ...]:
        """Keys passed positionally to the constructor."""
        if self.kind is StrategyKind.CONSTRUCTOR:
            return self.constructor.parameters
        return ()

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.constructor}"


@dataclass(frozen=True)
class Plan:
    """
    Immutable result of planning.

    The graph has been checked for cycles, every strategy has been selected
    and ``order`` lists each component after all of its dependencies.
    """

    graph: DependencyGraph
    descriptors: Mapping[ComponentKey, ComponentDescriptor]
    strategies: Mapping[ComponentKey, ConstructionStrategy]
    order: tuple[ComponentKey, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "descriptors", MappingProxyType(dict(self.descriptors)))
        object.__setattr__(self, "strategies", MappingProxyType(dict(self.strategies)))
        object.__setattr__(self, "order", tuple(self.order))

    def strategy_for(self, key: ComponentKey) -> ConstructionStrategy:
        return self.strategies[key]

    def has_component(self, key: ComponentKey) -> bool:
        return key in self.descriptors

    def __str__(self) -> str:
        lines = [f"{key} [{self.strategies[key]}]" for key in self.order]
        return "\n".join(lines)

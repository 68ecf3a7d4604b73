"""
Model subpackage containing core data structures and types.

This subpackage holds the immutable values the container works on:
keys, descriptors, the dependency graph and the construction plan.
"""

from .descriptor import ComponentDescriptor, Constructor, InjectionPoint
from .graph import DependencyGraph
from .keys import ComponentKey
from .plan import ConstructionStrategy, Plan, StrategyKind

__all__ = [
    "ComponentDescriptor",
    "ComponentKey",
    "ConstructionStrategy",
    "Constructor",
    "DependencyGraph",
    "InjectionPoint",
    "Plan",
    "StrategyKind",
]

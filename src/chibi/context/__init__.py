"""
chibi-context - a minimal inversion-of-control container.

The container takes component descriptors and
- builds a dependency graph and rejects it if it contains a cycle
- computes a dependency-first construction order
- creates every component exactly once, injecting dependencies through a
  constructor or by assigning fields after construction

Descriptors come from the ``ComponentsDef`` DSL or from ``scan``.
"""

from .container import Container, ContainerState, new_container
from .cycles import CycleDetector
from .discovery import autowired, component, describe, scan
from .dsl import ComponentBuilder, ComponentsDef
from .errors import (
    AmbiguousConstructorError,
    ComponentNotFoundError,
    ConstructionFailedError,
    ContainerError,
    ContainerStateError,
    CycleDetectedError,
    DuplicateComponentError,
    InvalidDescriptorError,
    UnresolvedDependencyError,
)
from .factory import BeanFactory
from .graph_builder import DependencyGraphBuilder
from .introspection import Inject
from .model import (
    ComponentDescriptor,
    ComponentKey,
    ConstructionStrategy,
    Constructor,
    DependencyGraph,
    InjectionPoint,
    Plan,
    StrategyKind,
)
from .planner import InstantiationOrderer, Planner
from .registry import SingletonRegistry

__all__ = [
    "AmbiguousConstructorError",
    "BeanFactory",
    "ComponentBuilder",
    "ComponentDescriptor",
    "ComponentKey",
    "ComponentNotFoundError",
    "ComponentsDef",
    "ConstructionFailedError",
    "ConstructionStrategy",
    "Constructor",
    "Container",
    "ContainerError",
    "ContainerState",
    "ContainerStateError",
    "CycleDetectedError",
    "CycleDetector",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DuplicateComponentError",
    "Inject",
    "InjectionPoint",
    "InstantiationOrderer",
    "InvalidDescriptorError",
    "Plan",
    "Planner",
    "SingletonRegistry",
    "StrategyKind",
    "UnresolvedDependencyError",
    "autowired",
    "component",
    "describe",
    "new_container",
    "scan",
]

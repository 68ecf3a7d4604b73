"""
Errors raised while building or querying a container.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .model import ComponentKey, Constructor


class ContainerError(Exception):
    """Base class for every error raised by chibi-context."""


class UnresolvedDependencyError(ContainerError):
    """Raised when a declared dependency is not a recognised component."""

    def __init__(self, key: ComponentKey, dependent: ComponentKey | None = None):
        self.key = key
        self.dependent = dependent
        msg = f"No component found for {key}"
        if dependent:
            msg += f" (required by {dependent})"
        super().__init__(msg)


class AmbiguousConstructorError(ContainerError):
    """Raised when a component declares more than one injecting constructor."""

    def __init__(self, key: ComponentKey, constructors: Sequence[Constructor]):
        self.key = key
        self.constructors = tuple(constructors)
        names = ", ".join(str(constructor) for constructor in self.constructors)
        super().__init__(f"Multiple autowired constructors on {key}: {names}")


class CycleDetectedError(ContainerError):
    """Raised when the dependency graph contains a directed cycle."""

    def __init__(self, cycle: Sequence[ComponentKey], edges: str = ""):
        self.cycle = list(cycle)
        self.edges = edges
        cycle_str = " -> ".join(str(key) for key in self.cycle)
        msg = f"Dependency cycle detected: {cycle_str}"
        if edges:
            msg += f"\n{edges}"
        super().__init__(msg)


class ConstructionFailedError(ContainerError):
    """Raised when a component cannot be instantiated or wired."""

    def __init__(self, key: ComponentKey, cause: BaseException | str):
        self.key = key
        self.cause = cause
        super().__init__(f"Cannot create instance of {key}: {cause!s}")


class DuplicateComponentError(ContainerError):
    """Raised when two descriptors share the same component key or name."""

    def __init__(self, key: ComponentKey, other: ComponentKey | None = None):
        self.key = key
        self.other = other
        if other is None or other == key:
            super().__init__(f"Component {key} is described more than once")
        else:
            super().__init__(f"Components {key} and {other} share the name {key.name}")


class InvalidDescriptorError(ContainerError, ValueError):
    """Raised when a descriptor is internally inconsistent."""


class ComponentNotFoundError(ContainerError, LookupError):
    """Raised by ``Container.require`` for an unregistered component."""

    def __init__(self, key: ComponentKey | Any):
        self.key = key
        super().__init__(f"Component not found: {key}")


class ContainerStateError(ContainerError):
    """Raised when an operation is not valid in the container's current state."""

"""
Component descriptors: the only input the container core consumes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidDescriptorError
from .keys import ComponentKey


@dataclass(frozen=True)
class Constructor:
    """A way to create a component from an ordered list of dependencies."""

    factory: Callable[..., Any]
    parameters: tuple[ComponentKey, ...] = ()
    injecting: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "parameters", tuple(ComponentKey.get(p) for p in self.parameters)
        )

    @property
    def is_parameterless(self) -> bool:
        return not self.parameters

    def __str__(self) -> str:
        factory_name = getattr(self.factory, "__qualname__", repr(self.factory))
        params = ", ".join(str(p) for p in self.parameters)
        marker = "@autowired " if self.injecting else ""
        return f"{marker}{factory_name}({params})"


@dataclass(frozen=True)
class InjectionPoint:
    """An attribute assigned with a dependency after construction."""

    attribute: str
    key: ComponentKey

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", ComponentKey.get(self.key))

    def __str__(self) -> str:
        return f"{self.attribute}: {self.key}"


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    Immutable description of one component.

    Attributes:
        key: Identity of the component.
        dependencies: Ordered keys the component depends on. These are the
            edges of the dependency graph.
        injection_points: Attributes assigned after construction. Each key
            must also appear in ``dependencies``.
        constructors: Candidate constructors. When the key wraps a class and
            no parameterless constructor is declared, the class itself is
            added as one.
    """

    key: ComponentKey
    dependencies: tuple[ComponentKey, ...] = ()
    injection_points: tuple[InjectionPoint, ...] = ()
    constructors: tuple[Constructor, ...] = field(default=())

    def __post_init__(self) -> None:
        key = ComponentKey.get(self.key)
        dependencies = tuple(ComponentKey.get(dep) for dep in self.dependencies)
        injection_points = tuple(self.injection_points)
        constructors = tuple(self.constructors)

        seen_attributes: set[str] = set()
        for point in injection_points:
            if point.attribute in seen_attributes:
                raise InvalidDescriptorError(
                    f"Attribute '{point.attribute}' of {key} is injected more than once"
                )
            seen_attributes.add(point.attribute)
            if point.key not in dependencies:
                raise InvalidDescriptorError(
                    f"Injection point {point} of {key} is not a declared dependency"
                )

        if isinstance(key.target, type) and not any(c.is_parameterless for c in constructors):
            constructors = (Constructor(key.target),) + constructors

        object.__setattr__(self, "key", key)
        object.__setattr__(self, "dependencies", dependencies)
        object.__setattr__(self, "injection_points", injection_points)
        object.__setattr__(self, "constructors", constructors)

    @classmethod
    def of(
        cls,
        target: ComponentKey | type | str,
        dependencies: Iterable[ComponentKey | type | str] = (),
        injection_points: Iterable[InjectionPoint] = (),
        constructors: Iterable[Constructor] = (),
    ) -> ComponentDescriptor:
        """Convenience factory accepting plain types and strings."""
        return cls(
            ComponentKey.get(target),
            tuple(ComponentKey.get(dep) for dep in dependencies),
            tuple(injection_points),
            tuple(constructors),
        )

    @property
    def injecting_constructors(self) -> list[Constructor]:
        return [c for c in self.constructors if c.injecting]

    def __str__(self) -> str:
        deps = ", ".join(str(dep) for dep in self.dependencies)
        return f"{self.key} <- [{deps}]"

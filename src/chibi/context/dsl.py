"""
Fluent DSL for declaring components without introspection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from .errors import InvalidDescriptorError
from .model import ComponentDescriptor, ComponentKey, Constructor, InjectionPoint

type Target = type[Any] | ComponentKey | str


class ComponentsDef:
    """
    A module of component declarations.

    Every ``make`` call adds one component; the module turns them into
    descriptors lazily, so builders can be refined after ``make`` returns.

    Example:
        ```python
        module = ComponentsDef()
        module.make(Config)
        module.make(Database).constructor(Config)
        module.make(UserService).inject("database", Database)
        ```
    """

    def __init__(self) -> None:
        self._entries: list[ComponentBuilder[Any] | ComponentDescriptor] = []

    def make[T](self, target: type[T] | ComponentKey | str) -> ComponentBuilder[T]:
        """Start declaring the component identified by ``target``."""
        builder: ComponentBuilder[T] = ComponentBuilder(target)
        self._entries.append(builder)
        return builder

    def add(self, descriptor: ComponentDescriptor) -> None:
        """Add an already built descriptor."""
        self._entries.append(descriptor)

    @property
    def descriptors(self) -> list[ComponentDescriptor]:
        return [
            entry if isinstance(entry, ComponentDescriptor) else entry.build()
            for entry in self._entries
        ]

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self._entries)

    def __add__(self, other: ComponentsDef) -> ComponentsDef:
        """Combine two modules into a new one."""
        combined = ComponentsDef()
        combined._entries = self._entries + other._entries
        return combined


class ComponentBuilder[T]:
    """Builder for a single component descriptor."""

    def __init__(self, target: type[T] | ComponentKey | str):
        self._key = ComponentKey.get(target)
        self._dependencies: list[ComponentKey] = []
        self._injection_points: list[InjectionPoint] = []
        self._constructors: list[Constructor] = []

    @property
    def key(self) -> ComponentKey:
        return self._key

    def depends_on(self, *targets: Target) -> ComponentBuilder[T]:
        """Declare dependencies, in order. Repeated targets are kept only once."""
        for target in targets:
            self._add_dependency(ComponentKey.get(target))
        return self

    def constructor(
        self,
        *parameters: Target,
        factory: Callable[..., T] | None = None,
        autowired: bool = True,
    ) -> ComponentBuilder[T]:
        """
        Register a constructor taking ``parameters`` positionally.

        The parameters are declared as dependencies too.

        Args:
            parameters: Components passed to the constructor, in order.
            factory: Callable to invoke; defaults to the component class itself.
            autowired: Mark the constructor as dependency-injecting.
        """
        if factory is None:
            if not isinstance(self._key.target, type):
                raise InvalidDescriptorError(f"A factory is required for string component {self._key}")
            factory = self._key.target
        keys = tuple(ComponentKey.get(p) for p in parameters)
        for key in keys:
            self._add_dependency(key)
        self._constructors.append(Constructor(factory, keys, autowired))
        return self

    def inject(self, attribute: str, target: Target) -> ComponentBuilder[T]:
        """Assign the ``target`` singleton to ``attribute`` after construction."""
        key = ComponentKey.get(target)
        self._add_dependency(key)
        self._injection_points.append(InjectionPoint(attribute, key))
        return self

    def _add_dependency(self, key: ComponentKey) -> None:
        if key not in self._dependencies:
            self._dependencies.append(key)

    def build(self) -> ComponentDescriptor:
        """
        Build the descriptor.

        With a single autowired constructor its parameters lead the
        dependency list, so the constructor matches regardless of the order
        in which ``inject``/``depends_on``/``constructor`` were called.
        """
        dependencies = list(self._dependencies)
        injecting = [c for c in self._constructors if c.injecting]
        if len(injecting) == 1:
            leading = list(injecting[0].parameters)
            dependencies = leading + [dep for dep in dependencies if dep not in leading]
        return ComponentDescriptor(
            self._key,
            tuple(dependencies),
            tuple(self._injection_points),
            tuple(self._constructors),
        )

"""
Container - builds every component once and serves the singletons afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any, TypeVar, overload

from .cycles import CycleDetector
from .errors import ComponentNotFoundError, ContainerStateError
from .factory import BeanFactory
from .graph_builder import DependencyGraphBuilder
from .model import ComponentDescriptor, ComponentKey, Plan
from .planner import Planner
from .registry import SingletonRegistry

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ContainerState(Enum):
    """Lifecycle of a container build."""

    UNINITIALIZED = "uninitialized"
    GRAPH_BUILT = "graph_built"
    CYCLE_CHECKED = "cycle_checked"
    INSTANTIATED = "instantiated"
    READY = "ready"
    FAILED = "failed"


class Container:
    """
    Inversion-of-control container over a fixed set of components.

    Construction is all-or-nothing: ``initialize`` either leaves the
    container READY with every component built, or moves it to FAILED with
    an empty registry and re-raises the error.

    Example:
        ```python
        module = ComponentsDef()
        module.make(Database)
        module.make(UserService).constructor(Database)

        container = new_container(module)
        service = container.get(UserService)
        ```
    """

    def __init__(self, descriptors: Iterable[ComponentDescriptor]):
        self._descriptors = tuple(descriptors)
        self._registry = SingletonRegistry()
        self._state = ContainerState.UNINITIALIZED
        self._plan: Plan | None = None

    @property
    def state(self) -> ContainerState:
        return self._state

    @property
    def plan(self) -> Plan | None:
        """The executed Plan, available once the container is READY."""
        return self._plan

    def initialize(self) -> Container:
        """
        Run the full build pipeline.

        Returns:
            This container, now READY.

        Raises:
            ContainerStateError: If the container was already initialised.
            ContainerError: Any build error. The container is left FAILED and
                empty whatever the exception, KeyboardInterrupt included.
        """
        if self._state is not ContainerState.UNINITIALIZED:
            raise ContainerStateError(f"Container cannot be initialized from state {self._state.value}")

        try:
            builder = DependencyGraphBuilder(self._descriptors)
            graph = builder.build()
            self._transition(ContainerState.GRAPH_BUILT)

            CycleDetector(graph).check()
            self._transition(ContainerState.CYCLE_CHECKED)

            plan = Planner(graph, builder.descriptors).plan()
            BeanFactory(self._registry).produce(plan)
            self._transition(ContainerState.INSTANTIATED)
        except BaseException as e:
            logger.warning("Container build failed: %r", e)
            self._registry.clear()
            self._plan = None
            self._state = ContainerState.FAILED
            raise

        self._plan = plan
        self._registry.seal()
        self._transition(ContainerState.READY)
        logger.info("Container ready with %d components", len(self._registry))
        return self

    def _transition(self, state: ContainerState) -> None:
        logger.debug("Container state %s -> %s", self._state.value, state.value)
        self._state = state

    @overload
    def get(self, target: type[T]) -> T | None: ...

    @overload
    def get(self, target: ComponentKey | str) -> Any | None: ...

    def get(self, target: type[T] | ComponentKey | str) -> T | Any | None:
        """
        Get the singleton for ``target``.

        Args:
            target: A component type, its string name or a ComponentKey.

        Returns:
            The instance, or None if no such component is registered.
        """
        if self._state is not ContainerState.READY:
            return None
        return self._registry.get(ComponentKey.get(target))

    def require(self, target: type[T] | ComponentKey | str) -> T | Any:
        """
        Get the singleton for ``target``, failing if it is not registered.

        Raises:
            ComponentNotFoundError: If no such component is registered.
        """
        instance = self.get(target)
        if instance is None:
            raise ComponentNotFoundError(ComponentKey.get(target))
        return instance

    def has(self, target: type[Any] | ComponentKey | str) -> bool:
        return self._state is ContainerState.READY and ComponentKey.get(target) in self._registry

    def list_component_names(self) -> list[str]:
        """Qualified names of every registered component, in construction order."""
        return self._registry.names()

    def get_instance_count(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Container(state={self._state.value}, components={len(self._registry)})"


def new_container(descriptors: Iterable[ComponentDescriptor]) -> Container:
    """
    Build a READY container from ``descriptors``.

    ``descriptors`` may be any iterable of ComponentDescriptor, such as a
    ComponentsDef module or the list returned by ``scan``.

    Raises:
        ContainerError: If the configuration is invalid or a component
            cannot be built. No container is returned in that case.
    """
    return Container(descriptors).initialize()

"""
Annotation-driven component discovery.

Classes marked with ``@component`` are turned into descriptors:

- a constructor marked with ``@autowired`` (``__init__``, a classmethod or a
  staticmethod) declares its annotated parameters as dependencies;
- class-level fields annotated ``Annotated[T, Inject]`` are injected after
  construction and are dependencies too.

``scan`` walks a package and collects every component defined in it.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Callable
from types import ModuleType
from typing import Any, TypeVar

from .introspection import SignatureIntrospector
from .model import ComponentDescriptor, ComponentKey, Constructor

C = TypeVar("C", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

_COMPONENT_ATTR = "__chibi_component__"
_AUTOWIRED_ATTR = "__chibi_autowired__"

logger = logging.getLogger(__name__)


def component(cls: C) -> C:
    """Mark a class as a container component."""
    setattr(cls, _COMPONENT_ATTR, True)
    return cls


def autowired(func: F) -> F:
    """Mark a constructor as dependency-injecting."""
    setattr(func, _AUTOWIRED_ATTR, True)
    return func


def is_component(obj: Any) -> bool:
    # Only the class itself counts, subclasses of a component are not components.
    return inspect.isclass(obj) and bool(obj.__dict__.get(_COMPONENT_ATTR, False))


def describe(cls: type) -> ComponentDescriptor:
    """
    Build the descriptor of ``cls`` from its annotations.

    Dependencies are the parameters of the autowired constructor (when there
    is exactly one) followed by injected fields not already listed.
    """
    constructors = _autowired_constructors(cls)
    injection_points = SignatureIntrospector.injection_points(cls)

    dependencies: list[ComponentKey] = []
    if len(constructors) == 1:
        dependencies.extend(constructors[0].parameters)
    for point in injection_points:
        if point.key not in dependencies:
            dependencies.append(point.key)

    return ComponentDescriptor(
        ComponentKey.get(cls),
        tuple(dependencies),
        injection_points,
        tuple(constructors),
    )


def _autowired_constructors(cls: type) -> list[Constructor]:
    constructors: list[Constructor] = []
    for name, member in vars(cls).items():
        if isinstance(member, classmethod):
            if getattr(member.__func__, _AUTOWIRED_ATTR, False):
                params = SignatureIntrospector.parameter_keys(member.__func__, skip_first=True)
                constructors.append(Constructor(getattr(cls, name), params, injecting=True))
        elif isinstance(member, staticmethod):
            if getattr(member.__func__, _AUTOWIRED_ATTR, False):
                params = SignatureIntrospector.parameter_keys(member.__func__)
                constructors.append(Constructor(member.__func__, params, injecting=True))
        elif name == "__init__" and getattr(member, _AUTOWIRED_ATTR, False):
            params = SignatureIntrospector.parameter_keys(member, skip_first=True)
            constructors.append(Constructor(cls, params, injecting=True))
    return constructors


def scan(package: str | ModuleType) -> list[ComponentDescriptor]:
    """
    Import ``package`` and all of its submodules and describe every component found.

    Args:
        package: A module object or a dotted module name.

    Returns:
        One descriptor per component class, in discovery order.
    """
    root = importlib.import_module(package) if isinstance(package, str) else package
    modules = [root]
    if hasattr(root, "__path__"):
        for info in pkgutil.walk_packages(root.__path__, prefix=f"{root.__name__}."):
            modules.append(importlib.import_module(info.name))

    descriptors: list[ComponentDescriptor] = []
    for module in modules:
        for _, obj in inspect.getmembers(module, is_component):
            if obj.__module__ != module.__name__:
                continue
            descriptors.append(describe(obj))

    logger.debug("Discovered %d components in %s", len(descriptors), root.__name__)
    return descriptors

"""
Signature and annotation introspection used by component discovery.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from typing import Annotated, Any, get_args, get_origin

from .errors import InvalidDescriptorError
from .model import ComponentKey, InjectionPoint


class Inject:
    """
    Marker for fields that require injection.

    Usage: ``database: Annotated[Database, Inject]``
    """


class SignatureIntrospector:
    """Extracts dependency keys from callables and classes."""

    @staticmethod
    def parameter_keys(func: Callable[..., Any], skip_first: bool = False) -> tuple[ComponentKey, ...]:
        """
        Extract the component keys of a callable's parameters, in order.

        Args:
            func: The function to inspect.
            skip_first: Skip the first parameter (``self`` or ``cls``).

        Returns:
            One key per parameter.

        Raises:
            InvalidDescriptorError: If a parameter has no usable type annotation.
        """
        signature = inspect.signature(func)
        try:
            hints = typing.get_type_hints(func)
        except NameError as e:
            raise InvalidDescriptorError(f"Cannot resolve annotations of {func.__qualname__}: {e}") from e

        params = list(signature.parameters.values())
        if skip_first:
            params = params[1:]

        keys: list[ComponentKey] = []
        for param in params:
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            hint = hints.get(param.name)
            if hint is None:
                raise InvalidDescriptorError(
                    f"Parameter '{param.name}' of {func.__qualname__} has no type annotation"
                )
            keys.append(SignatureIntrospector._key(hint, f"parameter '{param.name}' of {func.__qualname__}"))
        return tuple(keys)

    @staticmethod
    def injection_points(cls: type) -> tuple[InjectionPoint, ...]:
        """Find class-level annotations of the form ``Annotated[T, Inject]``."""
        try:
            hints = typing.get_type_hints(cls, include_extras=True)
        except NameError as e:
            raise InvalidDescriptorError(f"Cannot resolve annotations of {cls.__qualname__}: {e}") from e

        points: list[InjectionPoint] = []
        for name, hint in hints.items():
            if get_origin(hint) is not Annotated:
                continue
            target, *metadata = get_args(hint)
            if any(meta is Inject or isinstance(meta, Inject) for meta in metadata):
                points.append(InjectionPoint(name, SignatureIntrospector._key(target, f"field '{name}' of {cls.__qualname__}")))
        return tuple(points)

    @staticmethod
    def _key(hint: Any, where: str) -> ComponentKey:
        if get_origin(hint) is Annotated:
            hint = get_args(hint)[0]
        try:
            return ComponentKey.get(hint)
        except TypeError as e:
            raise InvalidDescriptorError(f"Unsupported annotation {hint!r} on {where}") from e

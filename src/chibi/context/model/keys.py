"""
ComponentKey implementation for the container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ComponentKey:
    """The identity of a component: a Python type or a plain string name."""

    target: type | str

    @classmethod
    def get(cls, target: ComponentKey | type | str | Any) -> ComponentKey:
        """Normalise a type, a string or an existing key into a ComponentKey."""
        if isinstance(target, ComponentKey):
            return target
        if not isinstance(target, (type, str)):
            raise TypeError(f"Cannot use {target!r} as a component key")
        return cls(target)

    @property
    def name(self) -> str:
        """Qualified name of the component, e.g. ``app.services.UserService``."""
        if isinstance(self.target, str):
            return self.target
        module = getattr(self.target, "__module__", None)
        qualname = getattr(self.target, "__qualname__", self.target.__name__)
        if module is None or module == "builtins":
            return qualname
        return f"{module}.{qualname}"

    def __str__(self) -> str:
        return getattr(self.target, "__name__", str(self.target))

    def __hash__(self) -> int:
        return hash(self.target)

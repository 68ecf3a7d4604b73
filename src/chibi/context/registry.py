"""
Singleton registry: one live instance per component key.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .errors import ContainerStateError
from .model import ComponentKey


class SingletonRegistry:
    """
    Stores the single instance of every built component.

    The first instance registered for a key wins and is never replaced.
    Once sealed the registry is read-only, which makes concurrent lookups
    from several threads safe.
    """

    def __init__(self) -> None:
        self._instances: dict[ComponentKey, Any] = {}
        self._sealed = False

    def register(self, key: ComponentKey, instance: Any) -> Any:
        """
        Store ``instance`` under ``key`` unless an instance is already present.

        Returns:
            The instance now held for ``key``, which is the earlier one if
            there was one.

        Raises:
            ContainerStateError: If the registry is sealed.
            ValueError: If ``instance`` is None.
        """
        if self._sealed:
            raise ContainerStateError(f"Registry is sealed, cannot register {key}")
        if instance is None:
            raise ValueError(f"Cannot register None for {key}")
        return self._instances.setdefault(key, instance)

    def get(self, key: ComponentKey) -> Any | None:
        return self._instances.get(key)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def clear(self) -> None:
        """Drop every instance; used when a build fails."""
        self._instances.clear()

    def keys(self) -> list[ComponentKey]:
        return list(self._instances)

    def names(self) -> list[str]:
        return [key.name for key in self._instances]

    def __contains__(self, key: object) -> bool:
        return key in self._instances

    def __iter__(self) -> Iterator[ComponentKey]:
        return iter(self._instances)

    def __len__(self) -> int:
        return len(self._instances)

"""
Bean factory - executes a Plan and fills the singleton registry.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import ConstructionFailedError, UnresolvedDependencyError
from .model import ComponentKey, ConstructionStrategy, Plan
from .registry import SingletonRegistry

logger = logging.getLogger(__name__)


class BeanFactory:
    """Instantiates components in plan order, wiring already built instances."""

    def __init__(self, registry: SingletonRegistry):
        self._registry = registry

    def produce(self, plan: Plan) -> None:
        """
        Build every component of ``plan`` that is not registered yet.

        Args:
            plan: A validated Plan whose order lists dependencies first.

        Raises:
            UnresolvedDependencyError: If a needed instance is missing.
            ConstructionFailedError: If a constructor or an assignment fails.
        """
        for key in plan.order:
            if key in self._registry:
                continue
            instance = self.create(key, plan.strategy_for(key))
            self._registry.register(key, instance)
            logger.debug("Created %s", key)

    def create(self, key: ComponentKey, strategy: ConstructionStrategy) -> Any:
        """Create one instance of ``key`` using ``strategy``."""
        args = [self._resolve(dep, key) for dep in strategy.arguments()]

        try:
            instance = strategy.constructor.factory(*args)
        except Exception as e:
            raise ConstructionFailedError(key, e) from e

        if instance is None:
            raise ConstructionFailedError(key, f"{strategy.constructor} returned None")

        for point in strategy.injection_points:
            value = self._resolve(point.key, key)
            try:
                setattr(instance, point.attribute, value)
            except Exception as e:
                raise ConstructionFailedError(key, e) from e

        return instance

    def _resolve(self, dependency: ComponentKey, dependent: ComponentKey) -> Any:
        instance = self._registry.get(dependency)
        if instance is None:
            raise UnresolvedDependencyError(dependency, dependent)
        return instance

from __future__ import annotations

"""
Collector Registry.

Routes each subject to the first registered collector that accepts it,
falling back to the generic collector. A registry is an explicit value built
once at startup and shared by every walk of a session.
"""

import logging
from typing import Any, List, Optional

from objsnoop.core.collectors.base import Collector
from objsnoop.core.collectors.generic import GenericCollector
from objsnoop.core.collectors.mapping import MappingCollector
from objsnoop.core.formatting.formatter import ValueFormatter
from objsnoop.core.scope import Scope
from objsnoop.domain.config import IntrospectionSettings
from objsnoop.domain.errors import CollectorSelectionError
from objsnoop.domain.models import CollectResult

logger = logging.getLogger(__name__)


class CollectorRegistry:
    """
    Ordered set of specialized collectors plus a fallback.
    """

    def __init__(self, fallback: Optional[Collector] = None) -> None:
        self._collectors: List[Collector] = []
        self._fallback: Collector = fallback or GenericCollector()

    @property
    def fallback(self) -> Collector:
        return self._fallback

    def register(self, collector: Collector) -> None:
        """
        Append a collector. Registering the same instance twice is a no-op.

        Raises:
            TypeError: If collector is None.
        """
        if collector is None:
            raise TypeError("collector must not be None")
        if any(c is collector for c in self._collectors):
            return
        self._collectors.append(collector)
        logger.debug(f"Registered collector '{collector.name}'")

    def unregister(self, collector: Collector) -> bool:
        """Remove a collector. Returns False if it was not registered."""
        for i, c in enumerate(self._collectors):
            if c is collector:
                del self._collectors[i]
                return True
        return False

    def clear(self) -> None:
        """Drop every registered collector. The fallback is kept."""
        self._collectors.clear()

    def collector_names(self) -> List[str]:
        names = [c.name for c in self._collectors]
        names.append(f"{self._fallback.name} (Default)")
        return names

    def select(self, subject: Any) -> Collector:
        """
        Pick the collector for a subject.

        Raises:
            CollectorSelectionError: If not even the fallback accepts it.
        """
        for collector in self._collectors:
            if collector.can_handle(subject):
                return collector
        if self._fallback.can_handle(subject):
            return self._fallback
        raise CollectorSelectionError(
            f"No collector accepts subject of type {type(subject).__name__}"
        )

    def collect(self, subject: Any, scope: Optional[Scope]) -> CollectResult:
        return self.select(subject).collect(subject, scope)

    def __len__(self) -> int:
        return len(self._collectors)


def create_default_registry(settings: Optional[IntrospectionSettings] = None) -> CollectorRegistry:
    """
    Build the registry used by a session.

    The mapping collector is registered ahead of the generic fallback.
    """
    settings = settings or IntrospectionSettings()
    formatter = ValueFormatter(settings)
    registry = CollectorRegistry(GenericCollector(settings, formatter))
    registry.register(MappingCollector(settings, formatter))
    return registry

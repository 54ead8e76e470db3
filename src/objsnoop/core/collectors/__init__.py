from __future__ import annotations

from .base import Collector
from .generic import GenericCollector
from .mapping import MappingCollector
from .registry import CollectorRegistry, create_default_registry

__all__ = [
    "Collector",
    "GenericCollector",
    "MappingCollector",
    "CollectorRegistry",
    "create_default_registry",
]

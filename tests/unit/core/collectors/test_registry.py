from __future__ import annotations

"""
Unit tests for the Collector Registry.

Verifies registration semantics and dispatch priority.
"""

from typing import Any, Optional

import pytest

from objsnoop.core.collectors.base import Collector
from objsnoop.core.collectors.generic import GenericCollector
from objsnoop.core.collectors.registry import CollectorRegistry, create_default_registry
from objsnoop.core.collectors.mapping import MappingCollector
from objsnoop.core.scope import Scope
from objsnoop.domain.errors import CollectorSelectionError
from objsnoop.domain.models import CollectResult, PropertyRecord


class Line:
    pass


class LineCollector(Collector):
    name = "Line Collector"

    def can_handle(self, subject: Any) -> bool:
        return isinstance(subject, Line)

    def collect(self, subject: Any, scope: Optional[Scope]) -> CollectResult:
        return CollectResult([PropertyRecord("Length", "float", "1.0")], {})


class AnythingCollector(LineCollector):
    name = "Anything"

    def can_handle(self, subject: Any) -> bool:
        return True


class NothingCollector(GenericCollector):
    name = "Nothing"

    def can_handle(self, subject: Any) -> bool:
        return False


def test_specialized_collector_wins_over_fallback() -> None:
    registry = CollectorRegistry()
    specialized = LineCollector()
    registry.register(specialized)

    assert registry.select(Line()) is specialized
    assert registry.select(object()) is registry.fallback


def test_first_registered_match_wins() -> None:
    registry = CollectorRegistry()
    first, second = LineCollector(), AnythingCollector()
    registry.register(first)
    registry.register(second)

    assert registry.select(Line()) is first
    assert registry.select(42) is second


def test_register_same_instance_twice_is_ignored() -> None:
    registry = CollectorRegistry()
    collector = LineCollector()
    registry.register(collector)
    registry.register(collector)

    assert len(registry) == 1


def test_register_none_raises() -> None:
    with pytest.raises(TypeError):
        CollectorRegistry().register(None)


def test_unregister_and_clear() -> None:
    registry = CollectorRegistry()
    collector = LineCollector()
    registry.register(collector)

    assert registry.unregister(collector) is True
    assert registry.unregister(collector) is False

    registry.register(collector)
    registry.clear()
    assert len(registry) == 0
    assert registry.select(Line()) is registry.fallback


def test_collector_names_list_default_last() -> None:
    registry = CollectorRegistry()
    registry.register(LineCollector())

    assert registry.collector_names() == ["Line Collector", "Generic Collector (Default)"]


def test_selection_error_when_fallback_refuses() -> None:
    registry = CollectorRegistry(fallback=NothingCollector())

    with pytest.raises(CollectorSelectionError):
        registry.select(object())


def test_none_subject_is_refused_by_default_fallback() -> None:
    with pytest.raises(CollectorSelectionError):
        CollectorRegistry().select(None)


def test_default_registry_routes_mappings() -> None:
    registry = create_default_registry()

    assert isinstance(registry.select({"a": 1}), MappingCollector)
    assert isinstance(registry.select(Line()), GenericCollector)
    assert registry.collect({"a": 1}, None).properties[0].name == "a"

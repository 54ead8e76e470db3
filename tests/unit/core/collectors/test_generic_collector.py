from __future__ import annotations

"""
Unit tests for the Generic Collector.

Verifies:
1. Member enumeration order (instance attributes, descriptors, class attributes).
2. Per-member failure containment and classification.
3. Declared type resolution.
4. Collection detection and the indexer record.
"""

from dataclasses import dataclass, field
from typing import List

import pytest

from objsnoop.core.collectors.generic import GenericCollector, enumerate_members
from objsnoop.domain.config import IntrospectionSettings
from objsnoop.domain.errors import NotApplicableError


class Base:
    kind = "base"

    @property
    def Area(self) -> float:
        return 12.5


class Derived(Base):
    version = 2

    def __init__(self) -> None:
        self.tag = "t1"

    @property
    def Length(self) -> float:
        return 3.0

    def compute(self) -> int:
        return 1

    @staticmethod
    def helper() -> None:
        return None


class WithInstanceAttrs(Base):
    def __init__(self) -> None:
        self.color = "red"
        self._hidden = 1
        self.weight = 7


class Faulty:
    @property
    def Good(self) -> int:
        return 1

    @property
    def Broken(self) -> int:
        raise RuntimeError("eInvalidInput")

    @property
    def Absent(self) -> str:
        raise NotApplicableError("not for this entity")

    @property
    def Unsupported(self) -> str:
        raise RuntimeError("Operation not supported")


class Slotted:
    __slots__ = ("x", "y")

    def __init__(self) -> None:
        self.x = 1
        self.y = 2


class Indexed:
    def __getitem__(self, key):
        return key


@dataclass
class Record:
    label: str
    points: List[int] = field(default_factory=list)


@pytest.fixture
def collector() -> GenericCollector:
    return GenericCollector()

# -----------------------------------------------------------------------------
# ENUMERATION
# -----------------------------------------------------------------------------

def test_members_follow_mro_order() -> None:
    names = [m.name for m in enumerate_members(Derived())]
    assert names == ["tag", "Length", "version", "Area", "kind"]


def test_instance_attributes_come_first_and_skip_private() -> None:
    names = [m.name for m in enumerate_members(WithInstanceAttrs())]
    assert names == ["color", "weight", "Area", "kind"]


def test_callables_are_not_members() -> None:
    names = [m.name for m in enumerate_members(Derived())]
    assert "compute" not in names
    assert "helper" not in names


def test_collect_is_deterministic(collector: GenericCollector) -> None:
    subject = Derived()
    first = collector.collect(subject, None)
    second = collector.collect(subject, None)

    assert [(r.name, r.display_value) for r in first.properties] == \
           [(r.name, r.display_value) for r in second.properties]

# -----------------------------------------------------------------------------
# FAILURE CONTAINMENT
# -----------------------------------------------------------------------------

def test_failing_getters_are_classified(collector: GenericCollector) -> None:
    result = collector.collect(Faulty(), None)
    by_name = {r.name: r for r in result.properties}

    assert by_name["Good"].display_value == "1"
    assert by_name["Good"].has_error is False

    broken = by_name["Broken"]
    assert broken.has_error is True
    assert broken.error_message == "eInvalidInput"
    assert broken.display_value == "[Error: eInvalidInput]"
    assert broken.declared_type == "int"

    assert by_name["Absent"].display_value == "[Not Applicable]"
    assert by_name["Absent"].has_error is False
    assert by_name["Absent"].not_applicable is True

    assert by_name["Unsupported"].display_value == "[Not Applicable]"


def test_one_failure_among_ten_members(collector: GenericCollector) -> None:
    namespace = {f"P{i}": property(lambda self, i=i: i) for i in range(9)}

    def _raise(self):
        raise RuntimeError("boom")

    namespace["P9"] = property(_raise)
    subject = type("TenMembers", (), namespace)()

    records = collector.collect(subject, None).properties

    assert len(records) == 10
    assert [r.has_error for r in records].count(True) == 1
    assert records[9].display_value == "[Error: boom]"
    assert [r.display_value for r in records[:9]] == [str(i) for i in range(9)]


def test_enumeration_failure_yields_single_error_record(collector: GenericCollector, monkeypatch) -> None:
    def _explode(subject):
        raise RuntimeError("reflection unavailable")

    monkeypatch.setattr("objsnoop.core.collectors.generic.enumerate_members", _explode)
    result = collector.collect(Derived(), None)

    assert len(result.properties) == 1
    assert result.properties[0].has_error is True
    assert "reflection unavailable" in result.properties[0].display_value

# -----------------------------------------------------------------------------
# TYPES AND COLLECTIONS
# -----------------------------------------------------------------------------

def test_declared_types(collector: GenericCollector) -> None:
    by_name = {r.name: r for r in collector.collect(Derived(), None).properties}

    assert by_name["Length"].declared_type == "float"
    assert by_name["version"].declared_type == "int"
    assert by_name["Length"].declaring_type == "Derived"
    assert by_name["Area"].declaring_type == "Base"


def test_dataclass_fields_use_field_types(collector: GenericCollector) -> None:
    result = collector.collect(Record("A", [1, 2]), None)
    by_name = {r.name: r for r in result.properties}

    assert by_name["label"].declared_type == "str"
    assert by_name["points"].declared_type == "List[int]"
    assert by_name["points"].is_collection is True
    assert by_name["points"].display_value == "[Collection: 2 items]"
    assert list(result.collections) == ["points"]


def test_generator_member_is_materialized(collector: GenericCollector) -> None:
    class Lazy:
        @property
        def Items(self):
            return (i for i in range(3))

    result = collector.collect(Lazy(), None)
    source = result.collections["Items"].source

    assert list(source) == [0, 1, 2]
    assert list(source) == [0, 1, 2]


class Stream:
    @property
    def Items(self):
        return (i for i in range(250))


def test_generator_count_uses_collection_cap_when_expand_cap_is_smaller() -> None:
    collector = GenericCollector(IntrospectionSettings(max_expand_items=10))
    record = collector.collect(Stream(), None).properties[0]

    assert record.display_value == "[Collection: 101+ items]"


def test_generator_count_is_exact_below_a_larger_collection_cap() -> None:
    collector = GenericCollector(IntrospectionSettings(max_collection_count=500))
    result = collector.collect(Stream(), None)

    assert result.properties[0].display_value == "[Collection: 250 items]"
    assert len(list(result.collections["Items"].source)) == 250


def test_sized_subject_reports_count(collector: GenericCollector) -> None:
    by_name = {r.name: r for r in collector.collect([4, 5, 6], None).properties}

    assert by_name["Count"].display_value == "3"
    assert by_name["Count"].declared_type == "int"


def test_existing_count_member_is_not_duplicated(collector: GenericCollector) -> None:
    class Sized3:
        Count = "own"

        def __len__(self) -> int:
            return 3

    records = [r for r in collector.collect(Sized3(), None).properties if r.name == "Count"]

    assert len(records) == 1
    assert records[0].display_value == "own"


def test_indexer_record(collector: GenericCollector) -> None:
    records = collector.collect(Indexed(), None).properties

    assert records[-1].name == "[index]"
    assert records[-1].display_value == "[Indexed Property]"
    assert records[-1].has_error is False


def test_can_handle_rejects_none(collector: GenericCollector) -> None:
    assert collector.can_handle(object()) is True
    assert collector.can_handle(None) is False


def test_slot_members_are_read(collector: GenericCollector) -> None:
    by_name = {r.name: r for r in collector.collect(Slotted(), None).properties}

    assert by_name["x"].display_value == "1"
    assert by_name["y"].display_value == "2"

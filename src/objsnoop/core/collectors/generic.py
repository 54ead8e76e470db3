from __future__ import annotations

"""
Generic Reflection Collector.

Universal fallback collector. Enumerates the public members of any subject in
a stable order, reads each one inside its own failure boundary and formats the
result. A member that raises never aborts the walk: it becomes either a
Not Applicable record or an error record.
"""

import dataclasses
import inspect
import logging
import typing
from collections.abc import Iterable, Sized
from typing import Any, Dict, List, NamedTuple, Optional

from objsnoop.core.collectors.base import Collector
from objsnoop.core.formatting.failures import classify_failure, failure_message
from objsnoop.core.formatting.formatter import ValueFormatter, is_collection_value
from objsnoop.core.scope import Scope
from objsnoop.domain import constants as const
from objsnoop.domain.config import IntrospectionSettings
from objsnoop.domain.models import (
    CollectionHandle,
    CollectResult,
    FailureKind,
    PropertyRecord,
    create_error_record,
)

logger = logging.getLogger(__name__)


class Member(NamedTuple):
    """A readable member found on a subject."""
    name: str
    owner: type
    attribute: Any = None


# -----------------------------------------------------------------------------
# MEMBER ENUMERATION
# -----------------------------------------------------------------------------

def _is_data_descriptor(attr: Any) -> bool:
    kind = type(attr)
    return hasattr(kind, "__get__") and (hasattr(kind, "__set__") or hasattr(kind, "__delete__"))


def _is_plain_class_attribute(attr: Any) -> bool:
    if isinstance(attr, (classmethod, staticmethod, type)):
        return False
    return not callable(attr)


def enumerate_members(subject: Any) -> List[Member]:
    """
    List the public readable members of a subject in a stable order.

    Instance attributes come first, then for each class of the MRO (most
    derived first) its descriptors followed by its plain class attributes.

    Args:
        subject: Object to enumerate.

    Returns:
        List[Member]: Members, each name reported once.
    """
    kind = type(subject)
    seen: set = set()
    members: List[Member] = []

    try:
        instance_dict = vars(subject)
    except TypeError:
        instance_dict = {}

    for name, value in list(instance_dict.items()):
        if not isinstance(name, str) or name.startswith("_") or name in seen:
            continue
        if inspect.isroutine(value) or isinstance(value, type):
            continue
        seen.add(name)
        members.append(Member(name, kind))

    for cls in kind.__mro__:
        if cls is object:
            continue
        descriptors: List[Member] = []
        plain: List[Member] = []
        for name, attr in list(vars(cls).items()):
            if name.startswith("_") or name in seen:
                continue
            if _is_data_descriptor(attr):
                descriptors.append(Member(name, cls, attr))
            elif _is_plain_class_attribute(attr):
                plain.append(Member(name, cls, attr))
            else:
                continue
            seen.add(name)
        members.extend(descriptors)
        members.extend(plain)

    return members


def has_indexer(subject: Any) -> bool:
    """Return True for non-iterable subjects whose type defines __getitem__."""
    return hasattr(type(subject), "__getitem__") and not isinstance(subject, Iterable)


# -----------------------------------------------------------------------------
# DECLARED TYPES
# -----------------------------------------------------------------------------

def type_name(annotation: Any) -> str:
    """Render a type or annotation as a short readable name."""
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def _class_hints(kind: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(kind)
    except Exception:
        hints: Dict[str, Any] = {}
        for cls in reversed(kind.__mro__):
            hints.update(getattr(cls, "__annotations__", {}) or {})
        return hints


def _dataclass_field_types(kind: type) -> Dict[str, Any]:
    if not dataclasses.is_dataclass(kind):
        return {}
    return {f.name: f.type for f in dataclasses.fields(kind)}


def _property_return_hint(attr: Any) -> Optional[Any]:
    getter = getattr(attr, "fget", None)
    if getter is None:
        return None
    try:
        return typing.get_type_hints(getter).get("return")
    except Exception:
        return getattr(getter, "__annotations__", {}).get("return")


# ==============================================================================
# COLLECTOR
# ==============================================================================

class GenericCollector(Collector):
    """
    Reflection-based collector accepting any non-None subject.
    """

    name = "Generic Collector"

    def __init__(
            self,
            settings: Optional[IntrospectionSettings] = None,
            formatter: Optional[ValueFormatter] = None,
    ) -> None:
        self.settings = settings or IntrospectionSettings()
        self.formatter = formatter or ValueFormatter(self.settings)

    def can_handle(self, subject: Any) -> bool:
        return subject is not None

    def collect(self, subject: Any, scope: Optional[Scope]) -> CollectResult:
        """
        Walk every public member of the subject.

        A failure of the enumeration itself yields a single error record.
        """
        properties: List[PropertyRecord] = []
        collections: Dict[str, CollectionHandle] = {}

        try:
            members = enumerate_members(subject)
            kind = type(subject)
            class_hints = _class_hints(kind)
            field_types = _dataclass_field_types(kind)

            for member in members:
                record = self._read_member(subject, member, scope, class_hints, field_types)
                properties.append(record)
                if record.is_collection and not record.has_error:
                    collections[record.name] = CollectionHandle(record.name, record.raw_value)

            if isinstance(subject, Sized) and all(r.name != const.COUNT_MEMBER_NAME for r in properties):
                properties.append(self._count_record(subject))

            if has_indexer(subject):
                properties.append(PropertyRecord(
                    name=const.INDEXER_MEMBER_NAME,
                    declared_type=kind.__name__,
                    display_value=const.INDEXED_MARKER,
                    declaring_type=kind.__qualname__,
                ))

        except Exception as e:
            message = failure_message(e)
            logger.warning(f"Member enumeration failed for {type(subject).__name__}: {message}")
            return CollectResult(
                properties=[PropertyRecord(
                    name="Error",
                    declared_type="Error",
                    display_value=f"Failed to collect properties: {message}",
                    has_error=True,
                    error_message=message,
                )],
                collections={},
            )

        return CollectResult(properties=properties, collections=collections)

    def _read_member(
            self,
            subject: Any,
            member: Member,
            scope: Optional[Scope],
            class_hints: Dict[str, Any],
            field_types: Dict[str, Any],
    ) -> PropertyRecord:
        declared = self._declared_annotation(member, class_hints, field_types)
        declaring = member.owner.__qualname__

        try:
            value = getattr(subject, member.name)
        except Exception as e:
            return self._failure_record(member.name, e, declared, declaring)

        is_collection = is_collection_value(value)
        if is_collection:
            value = self.formatter.retain(value)

        if declared is not None:
            declared_type = type_name(declared)
        else:
            declared_type = type(value).__name__

        return PropertyRecord(
            name=member.name,
            declared_type=declared_type,
            display_value=self.formatter.format(value, scope),
            raw_value=value,
            is_collection=is_collection,
            declaring_type=declaring,
        )

    def _failure_record(
            self,
            name: str,
            exc: Exception,
            declared: Optional[Any],
            declaring: str,
    ) -> PropertyRecord:
        declared_type = type_name(declared) if declared is not None else const.UNKNOWN_TYPE
        message = failure_message(exc)

        if classify_failure(exc, self.settings.not_applicable_patterns) is FailureKind.NOT_APPLICABLE:
            logger.debug(f"Member '{name}' not applicable: {message}")
            return PropertyRecord(
                name=name,
                declared_type=declared_type,
                display_value=const.NOT_APPLICABLE_MARKER,
                declaring_type=declaring,
                not_applicable=True,
            )

        logger.debug(f"Member '{name}' raised {type(exc).__name__}: {message}")
        return create_error_record(name, message, declared_type, declaring)

    @staticmethod
    def _declared_annotation(
            member: Member,
            class_hints: Dict[str, Any],
            field_types: Dict[str, Any],
    ) -> Optional[Any]:
        if isinstance(member.attribute, property):
            hint = _property_return_hint(member.attribute)
            if hint is not None:
                return hint
        if member.name in field_types:
            # Prefer the resolved hint when postponed annotations left a string
            return class_hints.get(member.name, field_types[member.name])
        return class_hints.get(member.name)

    def _count_record(self, subject: Sized) -> PropertyRecord:
        declaring = type(subject).__qualname__
        try:
            count = len(subject)
        except Exception as e:
            return self._failure_record(const.COUNT_MEMBER_NAME, e, int, declaring)
        return PropertyRecord(
            name=const.COUNT_MEMBER_NAME,
            declared_type="int",
            display_value=str(count),
            raw_value=count,
            declaring_type=declaring,
        )

from __future__ import annotations

"""
Introspection Domain Data Models.

Defines the records exchanged between collectors, the tree model and the
interface layers: one record per subject member, the named collections found
alongside them, and the closed set of value shapes the formatter switches on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

# -----------------------------------------------------------------------------
# CLASSIFICATION ENUMS
# -----------------------------------------------------------------------------

class ValueShape(Enum):
    """Closed enumeration of the value shapes known to the formatter."""
    NULL = "null"
    STRING = "string"
    PRIMITIVE = "primitive"
    GEOMETRY = "geometry"
    ENUM = "enum"
    HANDLE = "handle"
    COLLECTION = "collection"
    OBJECT = "object"


class FailureKind(Enum):
    """Outcome buckets for a member getter that raised."""
    NOT_APPLICABLE = "not_applicable"
    ERROR = "error"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PropertyRecord:
    """
    Display-oriented description of a single subject member.

    Attributes:
        name: Member name as enumerated on the subject.
        declared_type: Declared or observed type name of the member.
        display_value: Human-readable value; never empty.
        raw_value: Unformatted value, when the getter succeeded.
        is_collection: Whether the value is enumerable (excluding strings).
        has_error: Whether the getter raised an unexpected exception.
        error_message: Message of the unexpected exception.
        category: Optional grouping used by specialized collectors.
        declaring_type: Qualified name of the class declaring the member.
        not_applicable: Whether the getter raised a benign failure.
    """
    name: str
    declared_type: str
    display_value: str
    raw_value: Any = None
    is_collection: bool = False
    has_error: bool = False
    error_message: Optional[str] = None
    category: Optional[str] = None
    declaring_type: Optional[str] = None
    not_applicable: bool = False

    def __str__(self) -> str:
        if self.has_error:
            return f"{self.name}: [Error: {self.error_message or 'Unknown error'}]"
        return f"{self.name} = {self.display_value}"


@dataclass(frozen=True)
class CollectionHandle:
    """
    Named expansion point produced alongside property records.

    Attributes:
        name: Member name the collection was read from.
        source: Re-iterable source of raw items or handles.
    """
    name: str
    source: Iterable[Any]


@dataclass(frozen=True)
class CollectResult:
    """
    Output of a single collector pass over one subject.

    Attributes:
        properties: Records in member-enumeration order.
        collections: Collection handles keyed by member name.
    """
    properties: List[PropertyRecord] = field(default_factory=list)
    collections: Dict[str, CollectionHandle] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_record(
        name: str,
        message: str,
        declared_type: str = "Unknown",
        declaring_type: Optional[str] = None,
) -> PropertyRecord:
    """
    Create a record for a member whose getter raised unexpectedly.

    Args:
        name: Member name.
        message: Exception message to surface.
        declared_type: Declared type name, when known.
        declaring_type: Qualified name of the declaring class.

    Returns:
        PropertyRecord: Record flagged with has_error and an error placeholder.
    """
    return PropertyRecord(
        name=name,
        declared_type=declared_type,
        display_value=f"[Error: {message}]",
        has_error=True,
        error_message=message,
        declaring_type=declaring_type,
    )

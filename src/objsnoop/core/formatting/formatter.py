from __future__ import annotations

"""
Property Value Formatter.

Classifies raw member values into a closed set of shapes and renders each
shape into a bounded, human-readable display string. Handles are resolved
through the active scope so references show the type and name of their
target; collections are summarized by a capped item count.
"""

import datetime
import decimal
import itertools
import logging
import numbers
import uuid
from collections.abc import Iterable
from enum import Enum
from typing import Any, Optional, Tuple

from objsnoop.core.scope import Scope
from objsnoop.domain import constants as const
from objsnoop.domain.config import IntrospectionSettings
from objsnoop.domain.errors import ScopeError
from objsnoop.domain.geometry import GEOMETRY_TYPES
from objsnoop.domain.handles import Handle
from objsnoop.domain.models import ValueShape

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES = (
    bool,
    numbers.Number,
    decimal.Decimal,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    bytes,
    bytearray,
)

# -----------------------------------------------------------------------------
# SHARED HELPERS
# -----------------------------------------------------------------------------

def find_name(subject: Any) -> Optional[str]:
    """
    Probe the name-like members of a subject.

    Args:
        subject: Any object.

    Returns:
        Optional[str]: The first non-empty string found, else None.
    """
    if subject is None:
        return None
    for member in const.NAME_LIKE_MEMBERS:
        try:
            value = getattr(subject, member, None)
        except Exception:
            continue
        if isinstance(value, str) and value.strip():
            return value
    return None


def materialize(value: Any, limit: int) -> Any:
    """
    Turn a one-shot iterator into a re-iterable tuple.

    At most `limit` items are consumed. Re-iterable values are returned as-is.
    """
    try:
        if iter(value) is value:
            return tuple(itertools.islice(value, limit))
    except TypeError:
        pass
    return value


def is_collection_value(value: Any) -> bool:
    """Return True for enumerable values other than text, bytes and geometry."""
    if value is None or isinstance(value, (str, bytes, bytearray, Handle)):
        return False
    if isinstance(value, GEOMETRY_TYPES):
        return False
    return isinstance(value, Iterable)


# ==============================================================================
# FORMATTER
# ==============================================================================

class ValueFormatter:
    """
    Stateless (per settings) renderer of member values.
    """

    def __init__(self, settings: Optional[IntrospectionSettings] = None) -> None:
        self.settings = settings or IntrospectionSettings()

    # --------------------------------------------------------------------------
    # Classification
    # --------------------------------------------------------------------------

    def classify_value(self, value: Any) -> ValueShape:
        """Map a raw value onto its display shape."""
        if value is None:
            return ValueShape.NULL
        if isinstance(value, Handle):
            return ValueShape.HANDLE
        if isinstance(value, str):
            return ValueShape.STRING if value else ValueShape.NULL
        if isinstance(value, Enum):
            return ValueShape.ENUM
        if isinstance(value, GEOMETRY_TYPES):
            return ValueShape.GEOMETRY
        if isinstance(value, _PRIMITIVE_TYPES):
            return ValueShape.PRIMITIVE
        if is_collection_value(value):
            return ValueShape.COLLECTION
        return ValueShape.OBJECT

    def retain(self, value: Any) -> Any:
        """
        Make a collection value safe to keep for later counting and expansion.

        One-shot iterators are read up to one item past the larger of the
        count and expansion caps, so both stay exact.
        """
        limit = max(self.settings.max_collection_count, self.settings.max_expand_items) + 1
        return materialize(value, limit)

    # --------------------------------------------------------------------------
    # Rendering
    # --------------------------------------------------------------------------

    def format(self, value: Any, scope: Optional[Scope] = None) -> str:
        """
        Render a value for display. Never raises and never returns "".

        Args:
            value: Raw member value.
            scope: Open scope used to describe handles.

        Returns:
            str: Display text.
        """
        try:
            shape = self.classify_value(value)

            if shape is ValueShape.NULL:
                return const.NULL_MARKER
            if shape is ValueShape.STRING:
                return self._cap(value)
            if shape is ValueShape.PRIMITIVE:
                return self._cap(str(value))
            if shape is ValueShape.GEOMETRY:
                return self._format_geometry(value)
            if shape is ValueShape.ENUM:
                return self._cap(value.name or str(value))
            if shape is ValueShape.HANDLE:
                return self.format_handle(value, scope)
            if shape is ValueShape.COLLECTION:
                return self.format_collection(value)
            return self._cap(str(value))

        except Exception as e:
            logger.debug(f"Formatting failed for {type(value).__name__}: {e}")
            return f"[Error formatting value: {e}]"

    def format_handle(self, handle: Handle, scope: Optional[Scope]) -> str:
        """Describe the handle target as `TypeName "Name" [key]`."""
        if handle.is_null:
            return const.NULL_HANDLE_MARKER
        if scope is None:
            return f"[Handle: {handle.key}]"

        try:
            target = scope.resolve(handle)
        except ScopeError as e:
            logger.debug(f"Handle {handle.key} not resolvable: {e}")
            return f"[Handle: {handle.key}]"

        name = find_name(target)
        name_part = f' "{name}"' if name else ""
        return f"{type(target).__name__}{name_part} [{handle.key}]"

    def format_collection(self, value: Any) -> str:
        """Summarize an enumerable by its (capped) item count."""
        try:
            count, exceeded = self.count_items(value)
        except Exception:
            return "[Collection]"
        if exceeded:
            return f"[Collection: {count}+ items]"
        return f"[Collection: {count} items]"

    def count_items(self, value: Any) -> Tuple[int, bool]:
        """
        Count items, stopping once the display cap is exceeded.

        Returns:
            Tuple[int, bool]: Items consumed and whether the cap was exceeded.
        """
        cap = self.settings.max_collection_count
        count = 0
        for _ in value:
            count += 1
            if count > cap:
                return count, True
        return count, False

    def _format_geometry(self, value: Tuple[float, ...]) -> str:
        p = self.settings.float_precision
        return "(" + ", ".join(f"{float(c):.{p}f}" for c in value) + ")"

    def _cap(self, text: str) -> str:
        if not text:
            return const.NULL_MARKER
        limit = self.settings.max_string_length
        if len(text) > limit:
            return text[:limit] + const.ELLIPSIS
        return text

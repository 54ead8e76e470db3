from __future__ import annotations

"""
JSON Document Backing Store.

Loads a drawing-like JSON document into live, read-only objects addressed by
handles. Document layout:

    {
        "name": "site-plan",
        "root": "1F",
        "objects": {
            "1F": {"$type": "Layer", "Name": "Walls", "Owner": {"$ref": "1A"}},
            ...
        }
    }

Member values use a small tagged vocabulary: `$ref` (handle), `$point` and
`$vector` (geometry), `$fault` (a member whose getter raises) and inline
`$type` objects. Objects flagged with `"$erased": true` behave as stale.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from objsnoop.core.scope import BackingStore
from objsnoop.domain.errors import NotApplicableError
from objsnoop.domain.geometry import Point2d, Point3d, Vector2d, Vector3d
from objsnoop.domain.handles import Handle
from objsnoop.infra.fs import read_json_file
from objsnoop.infra.network import fetch_document

logger = logging.getLogger(__name__)

TYPE_TAG = "$type"
REF_TAG = "$ref"
POINT_TAG = "$point"
VECTOR_TAG = "$vector"
FAULT_TAG = "$fault"
ERASED_TAG = "$erased"

DEFAULT_STORE_ID = "document"


# -----------------------------------------------------------------------------
# DOCUMENT OBJECT MODEL
# -----------------------------------------------------------------------------

class Fault:
    """Placeholder for a member whose getter must fail."""

    def __init__(self, message: str) -> None:
        self.message = message

    def __repr__(self) -> str:
        return f"Fault({self.message!r})"


class DocumentObject:
    """
    Base class of every object decoded from a document.

    Concrete classes are generated per `$type`, with one read-only property
    per member name seen for that type anywhere in the document.
    """

    def __init__(self, key: Optional[str], values: Dict[str, Any]) -> None:
        self._key = key
        self._values = values

    def __repr__(self) -> str:
        if self._key:
            return f"<{type(self).__name__} [{self._key}]>"
        return f"<{type(self).__name__}>"

    __str__ = __repr__


def _member_property(member: str) -> property:
    def getter(self: DocumentObject):
        try:
            value = self._values[member]
        except KeyError:
            raise NotApplicableError(
                f"'{member}' is not applicable to this {type(self).__name__}"
            ) from None
        if isinstance(value, Fault):
            raise RuntimeError(value.message)
        return value

    getter.__name__ = member
    return property(getter)


def _is_type_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _geometry(tag: str, raw: Any) -> Any:
    if not isinstance(raw, list) or len(raw) not in (2, 3):
        raise ValueError(f"{tag} expects 2 or 3 coordinates, got {raw!r}")
    coords = [float(c) for c in raw]
    if tag == POINT_TAG:
        return Point2d(*coords) if len(coords) == 2 else Point3d(*coords)
    return Vector2d(*coords) if len(coords) == 2 else Vector3d(*coords)


# ==============================================================================
# STORE
# ==============================================================================

class DocumentStore(BackingStore):
    """
    Backing store over a decoded JSON document.
    """

    def __init__(self, document: Dict[str, Any], store_id: Optional[str] = None) -> None:
        if not isinstance(document, dict):
            raise ValueError("Document root must be a JSON object")
        raw_objects = document.get("objects")
        if not isinstance(raw_objects, dict):
            raise ValueError("Document has no 'objects' table")

        name = str(document.get("name") or "")
        super().__init__(store_id or name or DEFAULT_STORE_ID)
        self.name = name or self.store_id
        self.root_key: Optional[str] = document.get("root")

        self._classes: Dict[str, Type[DocumentObject]] = {}
        self._members: Dict[str, List[str]] = {}
        self._objects: Dict[str, DocumentObject] = {}
        self._erased: set = set()

        for raw in raw_objects.values():
            self._scan(raw)
        for cls_name, members in self._members.items():
            namespace = {m: _member_property(m) for m in members}
            self._classes[cls_name] = type(cls_name, (DocumentObject,), namespace)

        for key, raw in raw_objects.items():
            key = str(key)
            if not isinstance(raw, dict) or not _is_type_name(raw.get(TYPE_TAG)):
                raise ValueError(f"Object '{key}' has no valid {TYPE_TAG}")
            if raw.get(ERASED_TAG):
                self._erased.add(key)
            self._objects[key] = self._build(raw, key)

        logger.info(
            f"Loaded document '{self.name}': {len(self._objects)} objects, "
            f"{len(self._classes)} types"
        )

    # --------------------------------------------------------------------------
    # Constructors
    # --------------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: str, store_id: Optional[str] = None) -> DocumentStore:
        """
        Load a document from a local JSON file.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the content is not a valid document.
        """
        return cls(read_json_file(path), store_id)

    @classmethod
    def from_url(cls, url: str, store_id: Optional[str] = None) -> DocumentStore:
        """
        Download and load a document over HTTP.

        Raises:
            ValueError: If the document cannot be retrieved or is invalid.
        """
        data = fetch_document(url)
        if data is None:
            raise ValueError(f"Could not retrieve document from {url}")
        return cls(data, store_id)

    # --------------------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------------------

    def root_handle(self) -> Handle:
        """Handle of the document's root object (null if none declared)."""
        return self.handle(str(self.root_key) if self.root_key else None)

    def keys(self) -> List[str]:
        return list(self._objects)

    def type_names(self) -> List[str]:
        return list(self._classes)

    def _fetch(self, key: str) -> Any:
        if key in self._erased:
            raise LookupError(f"Object '{key}' is erased")
        return self._objects[key]

    # --------------------------------------------------------------------------
    # Decoding
    # --------------------------------------------------------------------------

    def _scan(self, raw: Any) -> None:
        """Record member names per type in first-seen order."""
        if isinstance(raw, list):
            for item in raw:
                self._scan(item)
            return
        if not isinstance(raw, dict):
            return

        type_name = raw.get(TYPE_TAG)
        if _is_type_name(type_name):
            members = self._members.setdefault(type_name, [])
            for member in raw:
                if member.startswith(("$", "_")) or member in members:
                    continue
                members.append(member)

        for value in raw.values():
            self._scan(value)

    def _build(self, raw: Dict[str, Any], key: Optional[str]) -> DocumentObject:
        cls = self._classes[raw[TYPE_TAG]]
        values = {
            member: self._decode(value)
            for member, value in raw.items()
            if not member.startswith(("$", "_"))
        }
        return cls(key, values)

    def _decode(self, raw: Any) -> Any:
        if isinstance(raw, list):
            return [self._decode(item) for item in raw]
        if not isinstance(raw, dict):
            return raw

        if REF_TAG in raw:
            ref = raw[REF_TAG]
            return self.handle(str(ref) if ref else None)
        if POINT_TAG in raw:
            return _geometry(POINT_TAG, raw[POINT_TAG])
        if VECTOR_TAG in raw:
            return _geometry(VECTOR_TAG, raw[VECTOR_TAG])
        if FAULT_TAG in raw:
            return Fault(str(raw[FAULT_TAG]))
        if TYPE_TAG in raw:
            if not _is_type_name(raw[TYPE_TAG]):
                raise ValueError(f"Inline object has an invalid {TYPE_TAG}: {raw[TYPE_TAG]!r}")
            return self._build(raw, None)
        return {k: self._decode(v) for k, v in raw.items()}

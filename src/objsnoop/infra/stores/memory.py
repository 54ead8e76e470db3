from __future__ import annotations

"""
In-Memory Backing Store.

Keeps live Python objects in a key map and hands out handles to them. Keys
default to upper-case hexadecimal counters, in the style of drawing
database handles.
"""

import itertools
import logging
import uuid
from typing import Any, Dict, Optional

from objsnoop.core.scope import BackingStore
from objsnoop.domain.handles import Handle

logger = logging.getLogger(__name__)

_FIRST_KEY = 0x20


class MemoryStore(BackingStore):
    """Backing store over a plain dictionary of objects."""

    def __init__(self, store_id: Optional[str] = None) -> None:
        super().__init__(store_id or f"memory-{uuid.uuid4().hex[:8]}")
        self._objects: Dict[str, Any] = {}
        self._counter = itertools.count(_FIRST_KEY)

    def add(self, obj: Any, key: Optional[str] = None) -> Handle:
        """
        Store an object and return a handle to it.

        Args:
            obj: Object to store.
            key: Explicit key. Generated when omitted.

        Returns:
            Handle: Handle bound to this store.

        Raises:
            ValueError: If the key is already in use.
        """
        if key is None:
            key = self._next_key()
        elif key in self._objects:
            raise ValueError(f"Key '{key}' already in use")
        self._objects[key] = obj
        return self.handle(key)

    def erase(self, key: str) -> None:
        """Remove an object; existing handles to it become stale."""
        self._objects.pop(key, None)
        logger.debug(f"Erased '{key}' from store '{self.store_id}'")

    def handle_for(self, key: str) -> Handle:
        return self.handle(key)

    def __contains__(self, key: str) -> bool:
        return key in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def _fetch(self, key: str) -> Any:
        return self._objects[key]

    def _next_key(self) -> str:
        while True:
            key = format(next(self._counter), "X")
            if key not in self._objects:
                return key

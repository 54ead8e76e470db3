from __future__ import annotations

"""
Store Handle Value Type.

A handle is a lightweight, store-scoped reference to a subject. It carries no
live object and is only resolvable through an open scope of the store that
issued it.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Handle:
    """
    Opaque reference to a subject held by a backing store.

    Attributes:
        store_id: Identifier of the issuing store.
        key: Store-specific key; empty or None denotes a null handle.
    """
    store_id: str
    key: Optional[str] = None

    @property
    def is_null(self) -> bool:
        """Return True when the handle points at nothing."""
        return not self.key

    def __str__(self) -> str:
        return self.key or "0"

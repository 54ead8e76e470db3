from __future__ import annotations

"""
Resource-Scoped Store Access.

A backing store hands out at most one open Scope at a time. Every handle
resolution happens through that scope, and any failure to resolve surfaces as
ScopeError regardless of what the store itself raised. Closing is idempotent
and always releases the store, even if the store's own teardown fails.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from objsnoop.domain.errors import ScopeError
from objsnoop.domain.handles import Handle

logger = logging.getLogger(__name__)


# ==============================================================================
# BACKING STORE CONTRACT
# ==============================================================================

class BackingStore(ABC):
    """
    Abstract owner of a subject graph addressed by handles.

    Subclasses implement `_fetch` and may hook into the open/close lifecycle.
    """

    def __init__(self, store_id: str) -> None:
        self._store_id = store_id
        self._active: Optional[Scope] = None

    @property
    def store_id(self) -> str:
        return self._store_id

    @property
    def active_scope(self) -> Optional[Scope]:
        """The currently open scope, if any."""
        return self._active

    def open(self) -> Scope:
        """
        Open a new resolution scope over this store.

        Returns:
            Scope: The open scope. Use it as a context manager.

        Raises:
            ScopeError: If a scope is already open on this store.
        """
        if self._active is not None:
            raise ScopeError(f"Store '{self._store_id}' already has an open scope")

        self._on_open()
        scope = Scope(self)
        self._active = scope
        logger.debug(f"Scope opened on store '{self._store_id}'")
        return scope

    def handle(self, key: Optional[str]) -> Handle:
        """Build a handle bound to this store."""
        return Handle(self._store_id, key)

    @abstractmethod
    def _fetch(self, key: str) -> Any:
        """
        Return the live subject for a key.

        Raises:
            LookupError: If the key is unknown or stale.
        """

    def _on_open(self) -> None:
        """Hook invoked before a scope is handed out."""

    def _on_close(self) -> None:
        """Hook invoked after a scope is released."""

    def _release(self, scope: Scope) -> None:
        if self._active is scope:
            self._active = None
        logger.debug(f"Scope closed on store '{self._store_id}'")
        self._on_close()


# ==============================================================================
# SCOPE
# ==============================================================================

class Scope:
    """
    Time-bounded read access to a backing store.

    Not thread-safe. Must not be retained beyond the operation that opened it.
    """

    def __init__(self, store: BackingStore) -> None:
        self._store = store
        self._closed = False

    @property
    def store_id(self) -> str:
        return self._store.store_id

    @property
    def closed(self) -> bool:
        return self._closed

    def resolve(self, handle: Handle) -> Any:
        """
        Resolve a handle to its live subject.

        Args:
            handle: Handle issued by this scope's store.

        Returns:
            Any: The live subject.

        Raises:
            ScopeError: If the scope is closed, or the handle is null, foreign,
                unknown or stale.
        """
        if self._closed:
            raise ScopeError("Scope is closed")
        if not isinstance(handle, Handle):
            raise ScopeError(f"Not a handle: {type(handle).__name__}")
        if handle.is_null:
            raise ScopeError("Null handle")
        if handle.store_id != self._store.store_id:
            raise ScopeError(
                f"Handle {handle.key} belongs to store '{handle.store_id}', "
                f"not '{self._store.store_id}'"
            )

        try:
            return self._store._fetch(handle.key)
        except ScopeError:
            raise
        except LookupError as e:
            raise ScopeError(f"Invalid or stale handle {handle.key}") from e
        except Exception as e:
            raise ScopeError(f"Failed to resolve handle {handle.key}: {e}") from e

    def close(self) -> None:
        """Close the scope. Calling it again has no effect."""
        if self._closed:
            return
        self._closed = True
        self._store._release(self)

    def __enter__(self) -> Scope:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

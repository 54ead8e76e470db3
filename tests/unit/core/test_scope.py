from __future__ import annotations

"""
Unit tests for resource-scoped store access.

Verifies:
1. Handle resolution inside an open scope.
2. ScopeError for closed scopes, null, foreign and stale handles.
3. Single open scope per store and idempotent close.
"""

from typing import Any

import pytest

from objsnoop.core.scope import BackingStore
from objsnoop.domain.errors import ScopeError
from objsnoop.domain.handles import Handle
from objsnoop.infra.stores import MemoryStore


class ExplodingStore(BackingStore):
    """Store whose fetch and teardown fail with unexpected errors."""

    def _fetch(self, key: str) -> Any:
        raise OSError("disk gone")

    def _on_close(self) -> None:
        raise RuntimeError("teardown failed")


def test_resolve_inside_scope(memory_store: MemoryStore) -> None:
    obj = object()
    handle = memory_store.add(obj)

    with memory_store.open() as scope:
        assert scope.resolve(handle) is obj


def test_resolve_after_close_raises(memory_store: MemoryStore) -> None:
    handle = memory_store.add(object())
    scope = memory_store.open()
    scope.close()

    with pytest.raises(ScopeError):
        scope.resolve(handle)


def test_null_handle_raises(memory_store: MemoryStore) -> None:
    with memory_store.open() as scope:
        with pytest.raises(ScopeError):
            scope.resolve(Handle(memory_store.store_id, None))


def test_foreign_handle_raises(memory_store: MemoryStore) -> None:
    other = MemoryStore("other")
    handle = other.add(object())

    with memory_store.open() as scope:
        with pytest.raises(ScopeError):
            scope.resolve(handle)


def test_stale_handle_raises(memory_store: MemoryStore) -> None:
    handle = memory_store.add(object(), key="AB")
    memory_store.erase("AB")

    with memory_store.open() as scope:
        with pytest.raises(ScopeError):
            scope.resolve(handle)


def test_unexpected_store_failure_becomes_scope_error() -> None:
    store = ExplodingStore("boom")
    scope = store.open()

    with pytest.raises(ScopeError):
        scope.resolve(Handle("boom", "1"))


def test_nested_open_is_rejected(memory_store: MemoryStore) -> None:
    with memory_store.open():
        with pytest.raises(ScopeError):
            memory_store.open()


def test_close_is_idempotent_and_frees_store(memory_store: MemoryStore) -> None:
    scope = memory_store.open()
    scope.close()
    scope.close()

    assert scope.closed is True
    assert memory_store.active_scope is None
    with memory_store.open() as again:
        assert again.closed is False


def test_close_releases_store_even_if_teardown_fails() -> None:
    store = ExplodingStore("boom")
    scope = store.open()

    with pytest.raises(RuntimeError):
        scope.close()

    assert scope.closed is True
    assert store.active_scope is None


def test_context_manager_closes_on_error(memory_store: MemoryStore) -> None:
    with pytest.raises(ValueError):
        with memory_store.open() as scope:
            raise ValueError("caller failure")

    assert scope.closed is True

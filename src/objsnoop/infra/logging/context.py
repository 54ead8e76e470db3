from __future__ import annotations

"""
Store-aware log context.

Stamps every record with the id of the store currently being inspected so
console and file formats can reference `%(store)s`.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

NO_STORE = "-"

_current_store: ContextVar[str] = ContextVar("objsnoop_store", default=NO_STORE)


class StoreContextFilter(logging.Filter):
    """Adds a `store` attribute to records that do not carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "store"):
            record.store = _current_store.get()
        return True


@contextmanager
def store_context(store_id: str) -> Iterator[None]:
    """Attribute records logged inside the block to the given store."""
    token = _current_store.set(store_id or NO_STORE)
    try:
        yield
    finally:
        _current_store.reset(token)

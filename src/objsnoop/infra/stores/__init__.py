from __future__ import annotations

"""
Backing Store Implementations.

Concrete stores the introspector can open scopes over.
"""

from objsnoop.infra.fs import is_remote_source
from objsnoop.infra.stores.document import DocumentObject, DocumentStore
from objsnoop.infra.stores.memory import MemoryStore


def load_document_store(source: str) -> DocumentStore:
    """Load a document store from a file path or an http(s) URL."""
    if is_remote_source(source):
        return DocumentStore.from_url(source)
    return DocumentStore.from_file(source)


__all__ = [
    "DocumentObject",
    "DocumentStore",
    "MemoryStore",
    "load_document_store",
]

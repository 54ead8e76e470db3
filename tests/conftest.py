from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared subjects, stores and documents used across the suites.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from objsnoop.core.introspector import Introspector  # noqa: E402
from objsnoop.domain.config import IntrospectionSettings  # noqa: E402
from objsnoop.infra.stores import MemoryStore  # noqa: E402


# -----------------------------------------------------------------------------
# Sample Subjects
# -----------------------------------------------------------------------------
class Layer:
    """Simple named subject with a plain attribute."""

    def __init__(self, name: str) -> None:
        self.name = name


class Container:
    """Subject with a scalar, a handle and a handle collection."""

    def __init__(self, count: int, owner: Any, items: List[Any]) -> None:
        self._count = count
        self._owner = owner
        self._items = items

    @property
    def Count(self) -> int:
        return self._count

    @property
    def Owner(self) -> Any:
        return self._owner

    @property
    def Items(self) -> List[Any]:
        return self._items


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def settings() -> IntrospectionSettings:
    return IntrospectionSettings()


@pytest.fixture
def introspector(settings: IntrospectionSettings) -> Introspector:
    return Introspector(settings=settings)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore("test-store")


@pytest.fixture
def container_store(memory_store: MemoryStore) -> Dict[str, Any]:
    """
    Populate a store with a Container whose owner and items are handles.

    Returns:
        Dict[str, Any]: The store plus the handles involved.
    """
    owner = memory_store.add(Layer("Site"), key="1A")
    items = [memory_store.add(Layer(f"Layer{i}")) for i in range(3)]
    root = memory_store.add(Container(3, owner, items), key="1F")
    return {"store": memory_store, "root": root, "owner": owner, "items": items}


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """Return a small drawing-like document exercising every value tag."""
    return {
        "name": "site-plan",
        "root": "1F",
        "objects": {
            "1A": {"$type": "BlockTableRecord", "Name": "*Model_Space"},
            "1F": {
                "$type": "Drawing",
                "Name": "Plan",
                "Owner": {"$ref": "1A"},
                "Entities": [{"$ref": "2A"}, {"$ref": "2B"}, {"$ref": "2C"}, {"$ref": None}],
                "Origin": {"$point": [0, 0, 0]},
            },
            "2A": {
                "$type": "Line",
                "Layer": "Walls",
                "StartPoint": {"$point": [0, 0, 0]},
                "EndPoint": {"$point": [10.5, 0, 0]},
                "Direction": {"$vector": [1, 0]},
                "Owner": {"$ref": "1A"},
            },
            "2B": {
                "$type": "Line",
                "Layer": "Doors",
                "StartPoint": {"$point": [1, 2, 0]},
                "Thickness": {"$fault": "eInvalidInput"},
                "Owner": {"$ref": "1A"},
            },
            "2C": {"$type": "Circle", "Layer": "Walls", "$erased": True},
        },
    }

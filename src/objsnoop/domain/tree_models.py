from __future__ import annotations

"""
Introspection Tree Data Models.

Provides the mutable node type used to build explorable trees over a subject
graph. Children are materialized lazily by the introspector; a node on its
own never talks to a store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from objsnoop.domain.handles import Handle
from objsnoop.domain.models import CollectionHandle, PropertyRecord


class NodeState(Enum):
    """Lifecycle of a node's children."""
    UNMATERIALIZED = "unmaterialized"
    EXPANDING = "expanding"
    EXPANDED = "expanded"


@dataclass(eq=False)
class Node:
    """
    A lazily expandable tree entry wrapping a subject or a named collection.

    Attributes:
        label: Display text for the node.
        subject: Wrapped subject, if any.
        is_collection: Whether the node wraps a collection.
        collection: Collection handle for collection nodes.
        handle: Handle the subject was resolved from, if any.
        error: Message for synthetic error nodes.
        state: Current materialization state.
        children: Child nodes, meaningful only once expanded.
        properties: Cached property records, None until collected.
        collections: Collection handles found by the last collect pass.
        truncated: Whether the last expansion stopped at the item cap.
    """
    label: str
    subject: Any = None
    is_collection: bool = False
    collection: Optional[CollectionHandle] = None
    handle: Optional[Handle] = None
    error: Optional[str] = None
    state: NodeState = NodeState.UNMATERIALIZED
    children: List["Node"] = field(default_factory=list)
    properties: Optional[List[PropertyRecord]] = None
    collections: Dict[str, CollectionHandle] = field(default_factory=dict)
    truncated: bool = False

    @property
    def expanded(self) -> bool:
        return self.state is NodeState.EXPANDED

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def add_child(self, child: "Node") -> None:
        """
        Append a child node.

        Args:
            child: Node to attach.

        Raises:
            TypeError: If child is None.
        """
        if child is None:
            raise TypeError("child must not be None")
        self.children.append(child)

    def clear_children(self) -> None:
        """Discard all children and return to the unmaterialized state."""
        self.children.clear()
        self.truncated = False
        self.state = NodeState.UNMATERIALIZED

    def __str__(self) -> str:
        return self.label

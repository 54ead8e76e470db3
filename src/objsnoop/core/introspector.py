from __future__ import annotations

"""
Introspection Tree Engine.

Builds explorable trees over a subject graph. A root node is collected
eagerly; every other node is materialized on demand by `expand`, which reads
through the caller's open scope and never keeps a reference to it. Failures
on individual items are turned into synthetic error children so a single bad
reference never hides its siblings.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from objsnoop.core.collectors.base import Collector
from objsnoop.core.collectors.registry import CollectorRegistry, create_default_registry
from objsnoop.core.formatting.failures import failure_message
from objsnoop.core.formatting.formatter import (
    ValueFormatter,
    find_name,
    is_collection_value,
)
from objsnoop.core.scope import Scope
from objsnoop.domain import constants as const
from objsnoop.domain.config import IntrospectionSettings
from objsnoop.domain.errors import ScopeError
from objsnoop.domain.handles import Handle
from objsnoop.domain.models import CollectionHandle, ValueShape
from objsnoop.domain.tree_models import Node, NodeState

logger = logging.getLogger(__name__)

_SIMPLE_SHAPES = (
    ValueShape.NULL,
    ValueShape.STRING,
    ValueShape.PRIMITIVE,
    ValueShape.GEOMETRY,
    ValueShape.ENUM,
)


def display_name(subject: Any) -> str:
    """Return the subject's name-like member, else its type name."""
    return find_name(subject) or type(subject).__name__


class Introspector:
    """
    Entry point for building and expanding introspection trees.
    """

    def __init__(
            self,
            registry: Optional[CollectorRegistry] = None,
            settings: Optional[IntrospectionSettings] = None,
    ) -> None:
        self.settings = settings or IntrospectionSettings()
        self.registry = registry or create_default_registry(self.settings)
        self.formatter = ValueFormatter(self.settings)

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    def register_collector(self, collector: Collector) -> None:
        """Add a specialized collector ahead of the generic fallback."""
        self.registry.register(collector)

    def introspect(self, subject: Any, scope: Optional[Scope], label: Optional[str] = None) -> Node:
        """
        Build the root node for a subject and collect its properties.

        Args:
            subject: A live object or a Handle to resolve first.
            scope: Open scope of the subject's store.
            label: Optional display label for the root.

        Returns:
            Node: Unexpanded root with properties and collections filled in.

        Raises:
            ScopeError: If a handle root cannot be resolved.
        """
        handle: Optional[Handle] = None
        if isinstance(subject, Handle):
            if scope is None:
                raise ScopeError("No open scope to resolve the root handle")
            handle = subject
            subject = scope.resolve(handle)

        node = Node(
            label=label or self._subject_label(subject, handle),
            subject=subject,
            handle=handle,
        )
        self.populate(node, scope)
        logger.debug(f"Introspected root '{node.label}' ({len(node.properties or [])} properties)")
        return node

    def populate(self, node: Node, scope: Optional[Scope], force: bool = False) -> Node:
        """
        Run the property walk for a subject node once.

        Args:
            node: Subject node to fill in.
            scope: Open scope used to describe handle-valued members.
            force: Re-collect even if properties are already cached.

        Returns:
            Node: The same node.
        """
        if node.is_collection or node.is_error:
            return node
        if node.properties is not None and not force:
            return node

        if node.subject is None:
            node.properties = []
            node.collections = {}
            return node

        result = self.registry.collect(node.subject, scope)
        node.properties = list(result.properties)
        node.collections = dict(result.collections)
        return node

    def expand(self, node: Node, scope: Optional[Scope]) -> Node:
        """
        Materialize the children of a node, discarding any previous ones.

        Args:
            node: Node to expand.
            scope: Open scope used to resolve handles.

        Returns:
            Node: The same node, now EXPANDED.

        Raises:
            RuntimeError: If the node is already being expanded.
        """
        if node.state is NodeState.EXPANDING:
            raise RuntimeError(f"Node '{node.label}' is already expanding")

        node.clear_children()
        if node.is_error:
            node.state = NodeState.EXPANDED
            return node

        node.state = NodeState.EXPANDING
        try:
            if node.is_collection:
                self._expand_collection(node, scope)
            else:
                self._expand_subject(node, scope)
        except Exception:
            node.clear_children()
            raise

        node.state = NodeState.EXPANDED
        return node

    def expand_to_depth(self, node: Node, scope: Optional[Scope], depth: int) -> Node:
        """
        Expand a node and its descendants down to the given depth.

        A descendant whose expansion fails is left unexpanded.
        """
        if depth <= 0:
            return node
        self.expand(node, scope)
        for child in node.children:
            try:
                self.expand_to_depth(child, scope, depth - 1)
            except Exception as e:
                logger.warning(f"Could not expand '{child.label}': {failure_message(e)}")
        return node

    # ==========================================================================
    # EXPANSION
    # ==========================================================================

    def _expand_subject(self, node: Node, scope: Optional[Scope]) -> None:
        self.populate(node, scope)
        for name, handle in node.collections.items():
            node.add_child(Node(
                label=f"{name} [Collection]",
                is_collection=True,
                collection=handle,
            ))

    def _expand_collection(self, node: Node, scope: Optional[Scope]) -> None:
        source = node.collection.source if node.collection is not None else node.subject
        is_mapping = isinstance(source, Mapping)
        cap = self.settings.max_expand_items

        try:
            iterator = iter(source.items() if is_mapping else source)
        except Exception as e:
            logger.debug(f"Collection '{node.label}' is not iterable: {e}")
            node.add_child(self._error_node(
                f"[Unsupported collection type: {type(source).__name__}]", failure_message(e)
            ))
            return

        index = 0
        try:
            for item in iterator:
                if index >= cap:
                    node.truncated = True
                    break
                prefix = f"[{item[0]}]" if is_mapping else f"[Item {index}]"
                value = item[1] if is_mapping else item
                try:
                    node.add_child(self._item_node(prefix, value, scope))
                except Exception as e:
                    message = failure_message(e)
                    node.add_child(self._error_node(f"{prefix} Error: {message}", message))
                index += 1
        except Exception as e:
            message = failure_message(e)
            logger.debug(f"Iteration of '{node.label}' failed after {index} items: {message}")
            node.add_child(self._error_node(f"[Error iterating collection: {message}]", message))

    def _item_node(self, prefix: str, value: Any, scope: Optional[Scope]) -> Node:
        if isinstance(value, Handle):
            return self._handle_item_node(prefix, value, scope)

        if is_collection_value(value):
            value = self.formatter.retain(value)
            return Node(
                label=f"{prefix} {type(value).__name__}",
                subject=value,
                is_collection=True,
                collection=CollectionHandle(prefix, value),
            )

        return Node(label=self._item_label(prefix, value), subject=value)

    def _handle_item_node(self, prefix: str, handle: Handle, scope: Optional[Scope]) -> Node:
        if handle.is_null:
            return Node(label=f"{prefix} {const.NULL_HANDLE_MARKER}", handle=handle)

        try:
            if scope is None:
                raise ScopeError("No open scope")
            target = scope.resolve(handle)
        except ScopeError as e:
            message = failure_message(e)
            logger.debug(f"Item {prefix} unresolvable: {message}")
            return self._error_node(f"{prefix} Error: {message}", message)

        return Node(
            label=f"{prefix} {type(target).__name__} [{handle.key}]",
            subject=target,
            handle=handle,
        )

    def _item_label(self, prefix: str, value: Any) -> str:
        name = find_name(value)
        if name:
            return f"{prefix} {name}"
        if self.formatter.classify_value(value) in _SIMPLE_SHAPES:
            return f"{prefix} {self.formatter.format(value)}"
        return f"{prefix} {type(value).__name__}"

    @staticmethod
    def _error_node(label: str, message: str) -> Node:
        return Node(label=label, error=message)

    @staticmethod
    def _subject_label(subject: Any, handle: Optional[Handle]) -> str:
        name = find_name(subject)
        label = type(subject).__name__
        if name:
            label += f' "{name}"'
        if handle is not None:
            label += f" [{handle.key}]"
        return label


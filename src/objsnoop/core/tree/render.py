from __future__ import annotations

"""
Tree Renderer.

Converts introspection nodes and property listings into plain-text lines.
Only children that have already been materialized are drawn; rendering never
triggers an expansion.
"""

from typing import List, Sequence

from objsnoop.domain.models import PropertyRecord
from objsnoop.domain.tree_models import Node

TRUNCATION_NOTE = "[Showing first {count} items]"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_properties(records: Sequence[PropertyRecord]) -> List[str]:
    """
    Format property records as `name (type) = value` lines.

    Records with a category are prefixed with it.

    Args:
        records: Property records in collection order.

    Returns:
        List[str]: One line per record.
    """
    lines: List[str] = []
    for record in records:
        value = record.display_value
        if record.has_error:
            value = f"[Error: {record.error_message or 'Unknown error'}]"
        line = f"{record.name} ({record.declared_type}) = {value}"
        if record.category:
            line = f"[{record.category}] {line}"
        lines.append(line)
    return lines


def render_node_tree(node: Node, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the expanded children of a node.

    Uses standard ASCII connectors (├──, └──). The node's own label is not
    written; callers add it as the header line.

    Args:
        node: Node whose children are drawn.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries: List[str] = [child.label for child in node.children]
    if node.truncated:
        entries.append(TRUNCATION_NOTE.format(count=len(node.children)))

    total = len(entries)
    for i, label in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{label}")

        if i < len(node.children) and node.children[i].expanded:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_node_tree(node.children[i], lines, prefix=new_prefix)


def render_tree(node: Node) -> List[str]:
    """Render a node header followed by its materialized subtree."""
    lines = [node.label]
    render_node_tree(node, lines)
    return lines

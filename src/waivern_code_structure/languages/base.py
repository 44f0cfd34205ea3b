"""Base utility functions for AST traversal.

These functions are language-agnostic and can be used by all language
implementations for common tree-sitter operations. They work on the UTF-8
encoded source so node byte offsets can be used directly.
"""

from tree_sitter import Node

_DEFAULT_ENCODING = "utf-8"

# Line index offset (tree-sitter uses 0-based, we want 1-based)
_LINE_INDEX_OFFSET = 1


def get_node_text(node: Node, source: bytes) -> str:
    """Get the text content of an AST node.

    Args:
        node: Tree-sitter node with start_byte and end_byte attributes
        source: UTF-8 encoded source the node was parsed from

    Returns:
        Text content of the node

    """
    return source[node.start_byte : node.end_byte].decode(_DEFAULT_ENCODING)


def start_line(node: Node) -> int:
    """Return the 1-based line a node starts on."""
    return node.start_point[0] + _LINE_INDEX_OFFSET


def end_line(node: Node) -> int:
    """Return the 1-based line a node ends on."""
    return node.end_point[0] + _LINE_INDEX_OFFSET


def find_nodes_by_type(node: Node, node_type: str) -> list[Node]:
    """Find all descendant nodes of a specific type (recursive).

    Args:
        node: Root node to search from
        node_type: Type of nodes to find

    Returns:
        List of matching nodes (depth-first order)

    """
    results: list[Node] = []
    _collect_nodes_by_type(node, node_type, results)
    return results


def find_child_by_type(node: Node, child_type: str) -> Node | None:
    """Find the first direct child of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of child node to find

    Returns:
        First matching child node or None

    """
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def find_children_by_type(node: Node, child_type: str) -> list[Node]:
    """Find all direct children of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of children to find

    Returns:
        List of matching child nodes

    """
    return [child for child in node.children if child.type == child_type]


def find_first_error(node: Node) -> Node | None:
    """Find the first ERROR or MISSING node in document order.

    Args:
        node: Root node to search from

    Returns:
        The first erroneous node, or None when the tree is clean

    """
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = find_first_error(child)
        if found is not None:
            return found
    return node


def _collect_nodes_by_type(node: Node, node_type: str, results: list[Node]) -> None:
    """Recursively collect nodes of a specific type.

    Args:
        node: Current node to examine
        node_type: Type of nodes to collect
        results: List to append matching nodes to

    """
    if node.type == node_type:
        results.append(node)

    for child in node.children:
        _collect_nodes_by_type(child, node_type, results)

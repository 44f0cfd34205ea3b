"""Language processors and tree-sitter helpers."""

from waivern_code_structure.languages.base import (
    end_line,
    find_child_by_type,
    find_children_by_type,
    find_first_error,
    find_nodes_by_type,
    get_node_text,
    start_line,
)
from waivern_code_structure.languages.golang import GoPartType, GoProcessor
from waivern_code_structure.languages.plaintext import PlainTextProcessor

__all__ = [
    # Base utilities
    "end_line",
    "find_child_by_type",
    "find_children_by_type",
    "find_first_error",
    "find_nodes_by_type",
    "get_node_text",
    "start_line",
    # Processors
    "GoPartType",
    "GoProcessor",
    "PlainTextProcessor",
]

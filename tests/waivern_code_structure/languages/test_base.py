"""Tests for base AST utility functions."""

from unittest.mock import MagicMock

from waivern_code_structure.languages.base import (
    end_line,
    find_child_by_type,
    find_children_by_type,
    find_first_error,
    find_nodes_by_type,
    get_node_text,
    start_line,
)


def _make_node(
    node_type: str,
    children: list[MagicMock] | None = None,
    is_missing: bool = False,
    has_error: bool = False,
) -> MagicMock:
    """Create a mock tree-sitter Node for testing."""
    node = MagicMock()
    node.type = node_type
    node.children = children or []
    node.is_missing = is_missing
    node.has_error = has_error
    return node


class TestGetNodeText:
    """Tests for get_node_text function."""

    def test_get_node_text_simple(self) -> None:
        """Test extracting ASCII text from a node."""
        source = b"func processData() {}"
        node = MagicMock()
        node.start_byte = 5  # "processData"
        node.end_byte = 16

        result = get_node_text(node, source)
        assert result == "processData"

    def test_get_node_text_unicode(self) -> None:
        """Test that byte offsets are honoured for multi-byte text."""
        source = 'const greeting = "你好世界"'.encode()
        node = MagicMock()
        # '你好世界' is 4 characters but 12 bytes in UTF-8
        node.start_byte = 18
        node.end_byte = 30

        result = get_node_text(node, source)
        assert result == "你好世界"


class TestLinePositions:
    """Tests for start_line and end_line."""

    def test_lines_are_one_based(self) -> None:
        """Test that tree-sitter's 0-based rows become 1-based lines."""
        node = MagicMock()
        node.start_point = (0, 4)
        node.end_point = (2, 1)

        assert start_line(node) == 1
        assert end_line(node) == 3


class TestFindNodesByType:
    """Tests for find_nodes_by_type function."""

    def test_find_nodes_by_type_multiple_matches(self) -> None:
        """Test finding matching nodes recursively in depth-first order."""
        nested = _make_node("comment")
        func1 = _make_node("function_declaration", [nested])
        func2 = _make_node("comment")
        root = _make_node("source_file", [func1, func2])

        result = find_nodes_by_type(root, "comment")
        assert result == [nested, func2]

    def test_find_nodes_by_type_no_matches(self) -> None:
        """Test returning empty list when no nodes match."""
        root = _make_node("source_file", [_make_node("package_clause")])

        assert find_nodes_by_type(root, "comment") == []


class TestFindChildByType:
    """Tests for find_child_by_type function."""

    def test_find_child_by_type_exists(self) -> None:
        """Test finding the first matching direct child."""
        keyword = _make_node("package")
        name = _make_node("package_identifier")
        clause = _make_node("package_clause", [keyword, name])

        assert find_child_by_type(clause, "package_identifier") is name

    def test_find_child_by_type_not_exists(self) -> None:
        """Test returning None when no child matches."""
        clause = _make_node("package_clause", [_make_node("package")])

        assert find_child_by_type(clause, "package_identifier") is None


class TestFindChildrenByType:
    """Tests for find_children_by_type function."""

    def test_find_children_by_type(self) -> None:
        """Test finding all matching direct children."""
        spec1 = _make_node("const_spec")
        spec2 = _make_node("const_spec")
        paren = _make_node("(")
        decl = _make_node("const_declaration", [paren, spec1, spec2])

        assert find_children_by_type(decl, "const_spec") == [spec1, spec2]


class TestFindFirstError:
    """Tests for find_first_error function."""

    def test_clean_tree_returns_none(self) -> None:
        """Test that a tree without errors yields None."""
        root = _make_node("source_file", [_make_node("package_clause")])

        assert find_first_error(root) is None

    def test_finds_error_node(self) -> None:
        """Test that the first ERROR node is returned."""
        error = _make_node("ERROR")
        decl = _make_node("function_declaration", [error], has_error=True)
        clause = _make_node("package_clause")
        root = _make_node("source_file", [clause, decl], has_error=True)

        assert find_first_error(root) is error

    def test_finds_missing_node(self) -> None:
        """Test that a MISSING node counts as an error."""
        missing = _make_node("}", is_missing=True)
        block = _make_node("block", [missing], has_error=True)
        root = _make_node("source_file", [block], has_error=True)

        assert find_first_error(root) is missing

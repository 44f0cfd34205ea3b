"""Go syntax tree wrapper built on tree-sitter-go.

tree-sitter recovers from errors instead of failing, so parsing here adds the
checks Go's own parser applies: no error nodes, a package clause first,
imports before other declarations and nothing but declarations at top level.
"""

import re
from functools import cache

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser

from waivern_code_structure.errors import SourceSyntaxError
from waivern_code_structure.languages.base import (
    find_child_by_type,
    find_first_error,
    find_nodes_by_type,
    get_node_text,
    start_line,
)

_DEFAULT_ENCODING = "utf-8"

# Go AST node types
PACKAGE_CLAUSE = "package_clause"
IMPORT_DECLARATION = "import_declaration"
FUNCTION_DECLARATION = "function_declaration"
METHOD_DECLARATION = "method_declaration"
CONST_DECLARATION = "const_declaration"
VAR_DECLARATION = "var_declaration"
TYPE_DECLARATION = "type_declaration"
COMMENT = "comment"

_TOP_LEVEL_DECLARATIONS = frozenset(
    {
        IMPORT_DECLARATION,
        FUNCTION_DECLARATION,
        METHOD_DECLARATION,
        CONST_DECLARATION,
        VAR_DECLARATION,
        TYPE_DECLARATION,
    }
)

# Spec node types held by each grouping declaration
SPEC_TYPES = {
    CONST_DECLARATION: frozenset({"const_spec"}),
    VAR_DECLARATION: frozenset({"var_spec"}),
    TYPE_DECLARATION: frozenset({"type_spec", "type_alias"}),
    IMPORT_DECLARATION: frozenset({"import_spec"}),
}

# Line comments Go treats as directives rather than documentation
_DIRECTIVE = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")

_ERROR_SNIPPET_LENGTH = 20

# Identifier node types that can be bound by a spec
_NAME_TYPES = frozenset({"identifier", "type_identifier"})


@cache
def go_language() -> Language:
    """Return the tree-sitter Go language binding."""
    return Language(tsgo.language())


def parse_go(source: str, file_path: str = "") -> "GoSyntaxTree":
    """Parse Go source and reject anything Go's compiler would reject.

    Args:
        source: Complete Go source file content
        file_path: Optional path used in error messages

    Returns:
        Parsed syntax tree

    Raises:
        SourceSyntaxError: If the source is not a valid Go file

    """
    parser = Parser()
    parser.language = go_language()
    encoded = source.encode(_DEFAULT_ENCODING)
    tree = parser.parse(encoded)
    syntax = GoSyntaxTree(encoded, tree.root_node, file_path)
    syntax.check()
    return syntax


class GoSyntaxTree:
    """A parsed Go file with position and comment helpers."""

    def __init__(self, source: bytes, root: Node, file_path: str = "") -> None:
        """Wrap a parsed tree.

        Args:
            source: UTF-8 encoded source the tree was built from
            root: The source_file root node
            file_path: Optional path used in error messages

        """
        self.source = source
        self.root = root
        self.file_path = file_path
        self._comments: list[Node] | None = None

    def check(self) -> None:
        """Raise SourceSyntaxError if the tree is not a valid Go file."""
        error_node = find_first_error(self.root)
        if error_node is not None:
            raise self._syntax_error(error_node, self._describe_error(error_node))

        seen_declaration = False
        package_seen = False
        for node in self.root.named_children:
            if node.type == COMMENT:
                continue
            if not package_seen:
                if node.type != PACKAGE_CLAUSE:
                    raise self._syntax_error(node, "expected 'package'")
                package_seen = True
                continue
            if node.type == PACKAGE_CLAUSE:
                raise self._syntax_error(node, "unexpected package clause")
            if node.type not in _TOP_LEVEL_DECLARATIONS:
                raise self._syntax_error(
                    node, "non-declaration statement outside function body"
                )
            if node.type == IMPORT_DECLARATION:
                if seen_declaration:
                    raise self._syntax_error(
                        node, "imports must appear before other declarations"
                    )
                continue
            seen_declaration = True

        if not package_seen:
            raise SourceSyntaxError("expected 'package'", 1, 1, self.file_path)

    def text(self, node: Node) -> str:
        """Return the source text of a node."""
        return get_node_text(node, self.source)

    @property
    def package_clause(self) -> Node:
        """The package clause node (always present after check())."""
        node = find_child_by_type(self.root, PACKAGE_CLAUSE)
        if node is None:
            raise SourceSyntaxError("expected 'package'", 1, 1, self.file_path)
        return node

    @property
    def package_name_node(self) -> Node:
        """The package name identifier."""
        clause = self.package_clause
        name = find_child_by_type(clause, "package_identifier")
        return name if name is not None else clause

    @property
    def package_name(self) -> str:
        """The declared package name."""
        return self.text(self.package_name_node)

    def declarations(self) -> list[Node]:
        """Top-level declarations (imports included) in source order."""
        return [
            node
            for node in self.root.named_children
            if node.type in _TOP_LEVEL_DECLARATIONS
        ]

    def import_specs(self) -> list[Node]:
        """Every import spec of every import declaration."""
        specs: list[Node] = []
        for decl in self.declarations():
            if decl.type == IMPORT_DECLARATION:
                specs.extend(find_nodes_by_type(decl, "import_spec"))
        return specs

    @property
    def comments(self) -> list[Node]:
        """All comment nodes in document order."""
        if self._comments is None:
            self._comments = find_nodes_by_type(self.root, COMMENT)
        return self._comments

    def doc_comments(self, node: Node) -> list[Node]:
        """Return the lead comment group documenting a node.

        A lead group is a run of comments, each starting its own line, with no
        blank line between them, ending on the line directly above the node.
        A comment trailing code on its line never belongs to a lead group.
        """
        preceding = [c for c in self.comments if c.end_byte <= node.start_byte]
        group: list[Node] = []
        anchor = node
        for comment in reversed(preceding):
            if comment.end_point[0] + 1 < anchor.start_point[0]:
                break
            if anchor is node and comment.end_point[0] != node.start_point[0] - 1:
                break
            between = self.source[comment.end_byte : anchor.start_byte]
            if between.strip():
                break
            if not self._starts_line(comment):
                break
            group.append(comment)
            anchor = comment
        group.reverse()
        return group

    def doc_text(self, node: Node) -> str:
        """Return the normalised text of a node's lead comment group."""
        return self.comment_text(self.doc_comments(node))

    def comment_text(self, comments: list[Node]) -> str:
        """Normalise comments the way Go's CommentGroup.Text does.

        Comment markers, the first space of a line comment and directive
        lines are removed; trailing blank lines are dropped and runs of blank
        lines collapse to one.
        """
        lines: list[str] = []
        for comment in comments:
            raw = self.text(comment)
            if raw.startswith("//"):
                body = raw[2:]
                if _DIRECTIVE.match(body):
                    continue
                if body.startswith(" "):
                    body = body[1:]
                lines.append(body)
            else:
                lines.extend(raw[2:-2].split("\n"))

        cleaned: list[str] = []
        for line in (line.rstrip() for line in lines):
            if not line and (not cleaned or not cleaned[-1]):
                continue
            cleaned.append(line)
        while cleaned and not cleaned[-1]:
            cleaned.pop()
        if not cleaned:
            return ""
        return "\n".join(cleaned) + "\n"

    def has_trailing_comment(self, node: Node) -> bool:
        """Check for a comment on the node's line strictly to its right."""
        row = node.start_point[0]
        column = node.end_point[1]
        for comment in self.comments:
            if comment.start_point[0] != row:
                continue
            if comment.start_point[1] <= column:
                continue
            return True
        return False

    def _starts_line(self, comment: Node) -> bool:
        line_start = self.source.rfind(b"\n", 0, comment.start_byte) + 1
        return not self.source[line_start : comment.start_byte].strip()

    def _describe_error(self, node: Node) -> str:
        if node.is_missing:
            return f"expected '{node.type}'"
        snippet = self.text(node)[:_ERROR_SNIPPET_LENGTH].strip()
        if not snippet:
            return "unexpected end of file"
        return f"syntax error near '{snippet}'"

    def _syntax_error(self, node: Node, message: str) -> SourceSyntaxError:
        return SourceSyntaxError(
            message,
            line=start_line(node),
            column=node.start_point[1] + 1,
            file_path=self.file_path,
        )


def value_specs(decl: Node) -> list[Node]:
    """Return the specs of a const, var, type or import declaration.

    Specs sit directly under the declaration, or under a ``*_spec_list``
    node in grammars that group them; nested function literals are never
    searched.
    """
    spec_types = SPEC_TYPES.get(decl.type, frozenset())
    specs: list[Node] = []
    for child in decl.named_children:
        if child.type in spec_types:
            specs.append(child)
        elif child.type.endswith("_spec_list"):
            specs.extend(c for c in child.named_children if c.type in spec_types)
    return specs


def is_grouped(decl: Node) -> bool:
    """Check whether a declaration uses a parenthesised block."""
    for child in decl.children:
        if child.type == "(" or child.type.endswith("_spec_list"):
            return True
    return False


def spec_names(spec: Node) -> list[Node]:
    """Return the identifiers bound by a const, var or type spec.

    The grammar also tags the commas between names with the name field.
    """
    return [
        node
        for node in spec.children_by_field_name("name")
        if node.type in _NAME_TYPES
    ]


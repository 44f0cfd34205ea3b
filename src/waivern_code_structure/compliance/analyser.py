"""Documentation compliance rules for parsed Go files.

Rules follow Go's documentation conventions:

- The package clause carries a file comment starting ``Package <name>``.
- Every function, method and type is documented by a comment whose first
  line starts with its name.
- Grouped const and var blocks carry a block comment and every name in the
  block carries a comment to its right on the same line.
- Ungrouped const and var declarations carry a leading comment.
"""

import logging

from tree_sitter import Node

from waivern_code_structure.compliance.tree import Declaration, SourceFile
from waivern_code_structure.compliance.violations import (
    DocException,
    DocExceptionKind,
)
from waivern_code_structure.languages.base import end_line, start_line
from waivern_code_structure.languages.golang import syntax as go_syntax
from waivern_code_structure.languages.golang.syntax import (
    GoSyntaxTree,
    is_grouped,
    spec_names,
    value_specs,
)

logger = logging.getLogger(__name__)

# Characters that may follow an identifier at the start of its doc comment
_IDENTIFIER_SEPARATORS = (" ", "\t", "(")


def analyse_file(source_file: SourceFile) -> list[DocException]:
    """Return every documentation violation in a parsed file.

    The file comment rule comes first, then each top-level declaration in
    source order.

    Args:
        source_file: A parsed Go file

    Returns:
        Violations in source order

    Raises:
        NotInitialisedError: If the file has not been parsed

    """
    exceptions: list[DocException] = []
    file_exception = package_exception(source_file)
    if file_exception is not None:
        exceptions.append(file_exception)
    for declaration in source_file.declarations:
        exceptions.extend(analyse_declaration(declaration))
    logger.debug(f"{source_file.path}: {len(exceptions)} documentation violations")
    return exceptions


def analyse_declaration(declaration: Declaration) -> list[DocException]:
    """Return the violations of one top-level declaration.

    Imports are never reported.
    """
    match declaration.node_type:
        case go_syntax.FUNCTION_DECLARATION | go_syntax.METHOD_DECLARATION:
            exception = func_exception(declaration)
            return [exception] if exception is not None else []
        case go_syntax.TYPE_DECLARATION:
            return type_exceptions(declaration)
        case go_syntax.CONST_DECLARATION:
            return value_exceptions(declaration, DocExceptionKind.CONST)
        case go_syntax.VAR_DECLARATION:
            return value_exceptions(declaration, DocExceptionKind.VAR)
        case _:
            return []


def package_exception(source_file: SourceFile) -> DocException | None:
    """Check the file comment attached to the package clause."""
    syntax = source_file.syntax
    clause = syntax.package_clause
    text = syntax.doc_text(clause).strip()
    if text and _first_line(text).startswith(f"Package {syntax.package_name}"):
        return None
    return DocException(
        file=str(source_file.path),
        kind=DocExceptionKind.FILE,
        line=start_line(clause),
    )


def func_exception(declaration: Declaration) -> DocException | None:
    """Check a function or method doc comment; methods use their bare name."""
    syntax = declaration.file.syntax
    name_node = declaration.node.child_by_field_name("name")
    if name_node is None:
        return None
    name = syntax.text(name_node)
    if has_identifier_prefix(syntax.doc_text(declaration.node), name):
        return None
    return DocException(
        file=str(declaration.file.path),
        kind=DocExceptionKind.FUNC,
        line=start_line(name_node),
        element=name,
    )


def type_exceptions(declaration: Declaration) -> list[DocException]:
    """Check that every type in a declaration is documented.

    Inside a parenthesised block a type's own doc comment counts; without
    one the block's doc comment is used.
    """
    syntax = declaration.file.syntax
    decl = declaration.node
    block_doc = syntax.doc_text(decl)
    grouped = is_grouped(decl)

    exceptions: list[DocException] = []
    for spec in value_specs(decl):
        names = spec_names(spec)
        if not names:
            continue
        name = syntax.text(names[0])
        doc = block_doc
        if grouped:
            doc = syntax.doc_text(spec) or block_doc
        if has_identifier_prefix(doc, name):
            continue
        exceptions.append(
            DocException(
                file=str(declaration.file.path),
                kind=DocExceptionKind.TYPE,
                line=start_line(names[0]),
                element=name,
            )
        )
    return exceptions


def value_exceptions(
    declaration: Declaration, kind: DocExceptionKind
) -> list[DocException]:
    """Check a const or var declaration.

    Args:
        declaration: A const or var declaration
        kind: DocExceptionKind.CONST or DocExceptionKind.VAR

    Returns:
        For a grouped block: a group violation when the block comment is
        missing, plus one violation per name lacking a trailing comment.
        For a single declaration: one violation when it has no leading
        comment.

    """
    syntax = declaration.file.syntax
    decl = declaration.node
    file_path = str(declaration.file.path)
    has_doc = bool(syntax.doc_text(decl).strip())

    if not is_grouped(decl):
        exceptions: list[DocException] = []
        for spec in value_specs(decl):
            names = spec_names(spec)
            if not names or has_doc:
                continue
            exceptions.append(
                DocException(
                    file=file_path,
                    kind=kind,
                    line=start_line(names[0]),
                    multi_name=len(names) > 1,
                    element=syntax.text(names[0]),
                )
            )
        return exceptions

    exceptions = []
    if not has_doc:
        exceptions.append(
            DocException(
                file=file_path,
                kind=kind,
                line=start_line(decl),
                end_line=end_line(decl),
                is_group=True,
            )
        )
    for spec in value_specs(decl):
        exceptions.extend(_trailing_comment_exceptions(syntax, spec, kind, file_path))
    return exceptions


def _trailing_comment_exceptions(
    syntax: GoSyntaxTree, spec: Node, kind: DocExceptionKind, file_path: str
) -> list[DocException]:
    names = spec_names(spec)
    multi_name = len(names) > 1
    return [
        DocException(
            file=file_path,
            kind=kind,
            line=start_line(name),
            multi_name=multi_name,
            element=syntax.text(name),
        )
        for name in names
        if not syntax.has_trailing_comment(name)
    ]


def has_identifier_prefix(text: str, identifier: str) -> bool:
    """Check that a doc comment's first line starts with an identifier.

    The identifier must be followed by a space, a tab or ``(``.
    """
    stripped = text.strip()
    if not stripped:
        return False
    first = _first_line(stripped)
    return any(first.startswith(identifier + sep) for sep in _IDENTIFIER_SEPARATORS)


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]

"""Go language processor: locate, replace and validate Go constructs."""

import logging
from enum import StrEnum

from tree_sitter import Language, Node

from waivern_code_structure.errors import (
    ContentValidationError,
    PartNotFoundError,
    ReplacementSyntaxError,
    SourceSyntaxError,
    UnsupportedPartTypeError,
)
from waivern_code_structure.languages.base import end_line, start_line
from waivern_code_structure.languages.golang.syntax import (
    CONST_DECLARATION,
    FUNCTION_DECLARATION,
    METHOD_DECLARATION,
    TYPE_DECLARATION,
    VAR_DECLARATION,
    GoSyntaxTree,
    go_language,
    parse_go,
    spec_names,
    value_specs,
)
from waivern_code_structure.models import PartArgs, PartInfo

logger = logging.getLogger(__name__)

_GO_EXTENSIONS = [".go"]
_DEFAULT_ENCODING = "utf-8"

# Number of characters of offending content echoed in validation errors
_PREVIEW_LENGTH = 20


class GoPartType(StrEnum):
    """Kinds of Go constructs that can be located and replaced.

    Methods are addressed as ``ReceiverType.MethodName`` with a leading ``*``
    for pointer receivers, e.g. ``*Server.Start`` or ``Point.String``.
    """

    FUNC = "func"
    TYPE = "type"
    CONST = "const"
    VAR = "var"
    IMPORT = "import"
    PACKAGE = "package"


class GoProcessor:
    """Go processor implementation.

    Parses full Go files with tree-sitter-go and works on UTF-8 byte offsets
    so spans can be spliced back into the original text exactly.
    """

    @property
    def language(self) -> str:
        """Return the canonical language name."""
        return "go"

    @property
    def file_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return _GO_EXTENSIONS

    def get_tree_sitter_language(self) -> Language:
        """Return the tree-sitter Go language binding."""
        return go_language()

    def supported_part_types(self) -> list[str]:
        """Return the Go construct kinds this processor supports."""
        return [part_type.value for part_type in GoPartType]

    def find_part(self, args: PartArgs) -> PartInfo:
        """Locate a Go construct by kind and name.

        Args:
            args: Full source plus the part type and name to find

        Returns:
            PartInfo for the construct, or PartInfo.not_found()

        Raises:
            UnsupportedPartTypeError: If the part type is not a Go part type
            SourceSyntaxError: If the source does not parse

        """
        part_type = self._part_type(args.part_type)
        syntax = parse_go(args.content, args.file_path)

        node = self._locate(syntax, part_type, args.part_name)
        if node is None:
            logger.debug(f"{part_type} '{args.part_name}' not found")
            return PartInfo.not_found()

        return PartInfo(
            start_line=start_line(node),
            end_line=end_line(node),
            start_offset=node.start_byte,
            end_offset=node.end_byte,
            content=syntax.text(node),
            found=True,
        )

    def replace_part(self, args: PartArgs) -> str:
        """Replace a Go construct and return the complete modified source.

        Args:
            args: Full source, the target kind and name, and new_content

        Returns:
            The whole source with the construct replaced

        Raises:
            SourceSyntaxError: If the original source does not parse
            PartNotFoundError: If the construct does not exist
            ReplacementSyntaxError: If the result is not valid Go

        """
        info = self.find_part(args)
        if not info.found:
            raise PartNotFoundError(args.part_type, args.part_name, args.file_path)

        source = args.content.encode(_DEFAULT_ENCODING)
        result = (
            source[: info.start_offset]
            + args.new_content.encode(_DEFAULT_ENCODING)
            + source[info.end_offset :]
        ).decode(_DEFAULT_ENCODING)

        try:
            parse_go(result, args.file_path)
        except SourceSyntaxError as e:
            raise ReplacementSyntaxError(
                f"replacement of {args.part_type} '{args.part_name}' "
                f"resulted in invalid Go syntax: {e}",
                line=e.line,
                column=e.column,
                file_path=args.file_path,
            ) from e

        return result

    def validate_content(self, args: PartArgs) -> None:
        """Check that new_content has the shape of the target construct.

        This is a cheap pre-check; only the re-parse done by replace_part
        guarantees the edited file is valid.

        Raises:
            UnsupportedPartTypeError: If the part type is not a Go part type
            ContentValidationError: If the content has the wrong shape

        """
        part_type = self._part_type(args.part_type)
        content = args.new_content.strip()
        preview = content[:_PREVIEW_LENGTH]

        match part_type:
            case GoPartType.FUNC:
                ok = content.startswith("func ")
                expected = "start with 'func '"
            case GoPartType.TYPE:
                ok = content.startswith("type ")
                expected = "start with 'type '"
            case GoPartType.CONST:
                ok = "=" in content or content.startswith("const")
                expected = "contain '=' or start with 'const'"
            case GoPartType.VAR:
                ok = "=" in content or content.startswith("var")
                expected = "contain '=' or start with 'var'"
            case GoPartType.IMPORT:
                ok = "import" in content or '"' in content
                expected = "contain 'import' or quotes"
            case GoPartType.PACKAGE:
                ok = content.startswith("package ")
                expected = "start with 'package '"

        if not ok:
            raise ContentValidationError(
                f"{part_type} replacement must {expected}, got: {preview}"
            )

    def validate_syntax(self, source: str) -> None:
        """Raise SourceSyntaxError if source is not a valid Go file."""
        parse_go(source)

    def _part_type(self, part_type: str) -> GoPartType:
        try:
            return GoPartType(part_type)
        except ValueError:
            raise UnsupportedPartTypeError(
                self.language, part_type, self.supported_part_types()
            ) from None

    def _locate(
        self, syntax: GoSyntaxTree, part_type: GoPartType, name: str
    ) -> Node | None:
        match part_type:
            case GoPartType.PACKAGE:
                return self._find_package(syntax, name)
            case GoPartType.IMPORT:
                return self._find_import(syntax, name)
            case GoPartType.CONST:
                return self._find_declaration(syntax, CONST_DECLARATION, name)
            case GoPartType.VAR:
                return self._find_declaration(syntax, VAR_DECLARATION, name)
            case GoPartType.TYPE:
                return self._find_declaration(syntax, TYPE_DECLARATION, name)
            case GoPartType.FUNC:
                return self._find_func(syntax, name)

    def _find_package(self, syntax: GoSyntaxTree, name: str) -> Node | None:
        if syntax.package_name == name:
            return syntax.package_name_node
        return None

    def _find_import(self, syntax: GoSyntaxTree, path: str) -> Node | None:
        for spec in syntax.import_specs():
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            value = syntax.text(path_node)
            if value in (path, f'"{path}"'):
                return spec
        return None

    def _find_declaration(
        self, syntax: GoSyntaxTree, decl_type: str, name: str
    ) -> Node | None:
        """Return the whole declaration block binding name."""
        for decl in syntax.declarations():
            if decl.type != decl_type:
                continue
            for spec in value_specs(decl):
                if any(syntax.text(ident) == name for ident in spec_names(spec)):
                    return decl
        return None

    def _find_func(self, syntax: GoSyntaxTree, name: str) -> Node | None:
        for decl in syntax.declarations():
            if decl.type not in (FUNCTION_DECLARATION, METHOD_DECLARATION):
                continue
            if qualified_func_name(syntax, decl) == name:
                return decl
        return None


def qualified_func_name(syntax: GoSyntaxTree, decl: Node) -> str:
    """Return a function's name, or ``Receiver.Method`` for a method.

    Pointer receivers keep their ``*``. Type arguments of generic receivers
    are dropped, so ``func (l *List[T]) Push`` becomes ``*List.Push``.
    """
    name_node = decl.child_by_field_name("name")
    name = syntax.text(name_node) if name_node is not None else ""
    if decl.type != METHOD_DECLARATION:
        return name
    return f"{receiver_type_name(syntax, decl)}.{name}"


def receiver_type_name(syntax: GoSyntaxTree, decl: Node) -> str:
    """Return the receiver type of a method, ``*``-prefixed for pointers."""
    receiver = decl.child_by_field_name("receiver")
    if receiver is None:
        return ""
    for param in receiver.named_children:
        type_node = param.child_by_field_name("type")
        if type_node is not None:
            return _type_name(syntax, type_node)
    return ""


def _type_name(syntax: GoSyntaxTree, node: Node) -> str:
    match node.type:
        case "type_identifier":
            return syntax.text(node)
        case "pointer_type":
            inner = node.named_children[0] if node.named_children else None
            return "*" + _type_name(syntax, inner) if inner is not None else ""
        case "generic_type":
            base = node.child_by_field_name("type")
            return _type_name(syntax, base) if base is not None else ""
        case "parenthesized_type":
            inner = node.named_children[0] if node.named_children else None
            return _type_name(syntax, inner) if inner is not None else ""
        case _:
            return ""

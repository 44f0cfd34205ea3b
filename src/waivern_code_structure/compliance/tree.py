"""In-memory model of a walked Go source tree."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from tree_sitter import Node

from waivern_code_structure.errors import NotInitialisedError
from waivern_code_structure.languages.base import start_line
from waivern_code_structure.languages.golang import GoSyntaxTree, parse_go

_DEFAULT_ENCODING = "utf-8"


class Declaration:
    """One top-level declaration node together with the file owning it."""

    def __init__(self, node: Node, file: SourceFile) -> None:
        self.node = node
        self.file = file

    @property
    def node_type(self) -> str:
        """The tree-sitter node type, e.g. ``function_declaration``."""
        return self.node.type

    @property
    def line(self) -> int:
        """1-based line the declaration starts on."""
        return start_line(self.node)

    def __repr__(self) -> str:
        return f"Declaration({self.node_type!r}, {self.file.path}:{self.line})"


class SourceFile:
    """A Go source file inside a walked directory.

    The syntax tree only exists after parse(); reading it or the
    declarations before that raises NotInitialisedError.
    """

    def __init__(self, path: Path, directory: SourceDirectory | None = None) -> None:
        """Create an unparsed file.

        Args:
            path: Path of the Go file
            directory: Directory node the file belongs to

        """
        self.path = path
        self.directory = directory
        self._syntax: GoSyntaxTree | None = None
        self._declarations: list[Declaration] | None = None

    @property
    def name(self) -> str:
        """The file's base name."""
        return self.path.name

    @property
    def is_parsed(self) -> bool:
        """Whether parse() has completed successfully."""
        return self._syntax is not None

    def parse(self) -> None:
        """Read and parse the file.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
            SourceSyntaxError: If the file is not valid Go

        """
        source = self.path.read_text(encoding=_DEFAULT_ENCODING)
        self._syntax = parse_go(source, str(self.path))
        self._declarations = None

    @property
    def syntax(self) -> GoSyntaxTree:
        """The parsed syntax tree.

        Raises:
            NotInitialisedError: If parse() has not been called

        """
        if self._syntax is None:
            raise NotInitialisedError(f"Go file {self.path} has not been parsed")
        return self._syntax

    @property
    def package_name(self) -> str:
        """The package this file declares."""
        return self.syntax.package_name

    @property
    def declarations(self) -> list[Declaration]:
        """Top-level declarations in source order, computed on first use."""
        syntax = self.syntax
        if self._declarations is None:
            self._declarations = [
                Declaration(node, self) for node in syntax.declarations()
            ]
        return self._declarations


class SourceDirectory:
    """A directory node of a walked source tree."""

    def __init__(self, path: Path, parent: SourceDirectory | None = None) -> None:
        """Create an empty directory node.

        Args:
            path: Directory path
            parent: Enclosing directory node, None for the walk root

        """
        self.path = path
        self.parent = parent
        self.has_readme = False
        self.files: list[SourceFile] = []
        self.subdirectories: list[SourceDirectory] = []

    @property
    def is_root(self) -> bool:
        """Whether this is the walk root."""
        return self.parent is None

    @property
    def package_name(self) -> str:
        """Package of the first parsed file, empty when there is none."""
        for source_file in self.files:
            if source_file.is_parsed:
                return source_file.package_name
        return ""

    def add_file(self, source_file: SourceFile) -> None:
        """Attach a file to this directory."""
        source_file.directory = self
        self.files.append(source_file)

    def add_subdirectory(self, directory: SourceDirectory) -> None:
        """Attach a child directory to this directory."""
        directory.parent = self
        self.subdirectories.append(directory)

    def walk(self) -> Iterator[SourceDirectory]:
        """Yield this directory and every descendant, depth first."""
        yield self
        for child in self.subdirectories:
            yield from child.walk()

    def __repr__(self) -> str:
        return (
            f"SourceDirectory({str(self.path)!r}, files={len(self.files)}, "
            f"subdirectories={len(self.subdirectories)})"
        )

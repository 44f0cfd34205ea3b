"""Error classes for waivern-code-structure.

This module provides:
- CodeStructureError: Base exception class for all library errors
- LanguageNotSupportedError, UnsupportedPartTypeError: Lookup exceptions
- SourceSyntaxError, ReplacementSyntaxError: Parse exceptions
- PartNotFoundError, ContentValidationError: Editing exceptions
- OperationNotSupportedError, NotInitialisedError: Usage exceptions
- InvalidPathError, DocCheckConfigError, SourceTreeParseError,
  OperationCancelledError: Documentation compliance exceptions
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waivern_code_structure.compliance.checker import DocExceptionsResult
    from waivern_code_structure.compliance.walker import FileParseFailure


class CodeStructureError(Exception):
    """Base exception for all waivern-code-structure errors."""

    pass


class LanguageNotSupportedError(CodeStructureError):
    """Raised when no processor is registered for a language."""

    def __init__(self, language: str, available: list[str]) -> None:
        """Initialise with the requested language and the registered ones."""
        self.language = language
        self.available = available
        super().__init__(
            f"Language/file type not supported: language={language}; "
            f"available={sorted(available)}"
        )


class UnsupportedPartTypeError(CodeStructureError):
    """Raised when a processor does not support a part type."""

    def __init__(self, language: str, part_type: str, supported: list[str]) -> None:
        """Initialise with the offending part type and the supported set."""
        self.language = language
        self.part_type = part_type
        self.supported = supported
        super().__init__(
            f"Unsupported part type for {language}: '{part_type}'. "
            f"Supported part types: {supported}"
        )


class SourceSyntaxError(CodeStructureError):
    """Raised when source code cannot be parsed."""

    def __init__(
        self,
        message: str,
        line: int = 0,
        column: int = 0,
        file_path: str = "",
    ) -> None:
        """Initialise with a message and an optional 1-based position."""
        self.line = line
        self.column = column
        self.file_path = file_path
        location = f"{line}:{column}: " if line else ""
        prefix = f"{file_path}:" if file_path else ""
        super().__init__(f"{prefix}{location}{message}")


class ReplacementSyntaxError(SourceSyntaxError):
    """Raised when a replacement turned valid source into invalid source."""

    pass


class PartNotFoundError(CodeStructureError):
    """Raised when a construct to replace does not exist."""

    def __init__(self, part_type: str, part_name: str, file_path: str = "") -> None:
        """Initialise with the construct kind and name."""
        self.part_type = part_type
        self.part_name = part_name
        location = f" {file_path}" if file_path else ""
        super().__init__(f"{part_type} '{part_name}' not found in file{location}")


class ContentValidationError(CodeStructureError):
    """Raised when replacement content does not look like the target construct."""

    pass


class OperationNotSupportedError(CodeStructureError):
    """Raised when a processor cannot perform an operation."""

    pass


class NotInitialisedError(CodeStructureError):
    """Raised when an object is used before its required setup."""

    pass


class InvalidPathError(CodeStructureError):
    """Raised when a path is missing or is neither a file nor a directory."""

    pass


class DocCheckConfigError(CodeStructureError):
    """Raised when documentation check configuration is invalid."""

    pass


class OperationCancelledError(CodeStructureError):
    """Raised when a caller cancels a directory walk."""

    pass


class SourceTreeParseError(CodeStructureError):
    """Raised when files under a walked tree failed to parse.

    Carries every failure plus the result computed from the files that did
    parse, so callers can still use the partial result.
    """

    def __init__(
        self,
        failures: list[FileParseFailure],
        partial_result: DocExceptionsResult | None = None,
    ) -> None:
        """Initialise with the per-file failures and the partial result."""
        self.failures = failures
        self.partial_result = partial_result
        details = "; ".join(f"{f.path}: {f.message}" for f in failures)
        super().__init__(f"{len(failures)} file(s) failed to parse: {details}")

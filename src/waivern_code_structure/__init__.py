"""Structural analysis and editing of Go source code.

This package provides:
- A processor registry mapping language identifiers to processors
- A Go processor that locates, replaces and shape-checks named constructs
- Syntax validation of source text and files on disk
- A Go documentation compliance check over files and directory trees

Processors are registered explicitly:

    registry = create_default_registry()
    info = find_part(registry, PartArgs(language="go", content=src,
                                        part_type="func", part_name="Foo"))
"""

from .detection import detect_language
from .errors import (
    CodeStructureError,
    ContentValidationError,
    DocCheckConfigError,
    InvalidPathError,
    LanguageNotSupportedError,
    NotInitialisedError,
    OperationCancelledError,
    OperationNotSupportedError,
    PartNotFoundError,
    ReplacementSyntaxError,
    SourceSyntaxError,
    SourceTreeParseError,
    UnsupportedPartTypeError,
)
from .models import PartArgs, PartInfo, ValidationResult
from .protocols import Processor
from .registry import (
    ProcessorRegistry,
    create_default_registry,
    edit_part,
    find_part,
    get_supported_part_types,
    replace_part,
    validate_syntax,
)
from .validation import validate_file, validate_files

__all__ = [
    # Registry and operations
    "ProcessorRegistry",
    "create_default_registry",
    "edit_part",
    "find_part",
    "get_supported_part_types",
    "replace_part",
    "validate_syntax",
    "validate_file",
    "validate_files",
    "detect_language",
    # Models
    "PartArgs",
    "PartInfo",
    "Processor",
    "ValidationResult",
    # Errors
    "CodeStructureError",
    "ContentValidationError",
    "DocCheckConfigError",
    "InvalidPathError",
    "LanguageNotSupportedError",
    "NotInitialisedError",
    "OperationCancelledError",
    "OperationNotSupportedError",
    "PartNotFoundError",
    "ReplacementSyntaxError",
    "SourceSyntaxError",
    "SourceTreeParseError",
    "UnsupportedPartTypeError",
]

"""Go documentation compliance checking.

Walks a Go source tree, applies Go's documentation conventions to every
parsed file and reports violations as DocException records.
"""

from waivern_code_structure.compliance.analyser import analyse_file
from waivern_code_structure.compliance.checker import (
    DocExceptionsArgs,
    DocExceptionsResult,
    PathType,
    ResolvedPath,
    doc_exceptions,
    resolve_path,
)
from waivern_code_structure.compliance.config import DocCheckConfig
from waivern_code_structure.compliance.report import DocIssue, DocReport, build_report
from waivern_code_structure.compliance.traversal import (
    DEFAULT_EXCLUDES,
    ExcludeMode,
    RecurseDirective,
    TraverseArgs,
)
from waivern_code_structure.compliance.tree import (
    Declaration,
    SourceDirectory,
    SourceFile,
)
from waivern_code_structure.compliance.violations import (
    DocException,
    DocExceptionKind,
    render_label,
)
from waivern_code_structure.compliance.walker import DirectoryWalker, FileParseFailure

__all__ = [
    "DEFAULT_EXCLUDES",
    "Declaration",
    "DirectoryWalker",
    "DocCheckConfig",
    "DocException",
    "DocExceptionKind",
    "DocExceptionsArgs",
    "DocExceptionsResult",
    "DocIssue",
    "DocReport",
    "ExcludeMode",
    "FileParseFailure",
    "PathType",
    "RecurseDirective",
    "ResolvedPath",
    "SourceDirectory",
    "SourceFile",
    "TraverseArgs",
    "analyse_file",
    "build_report",
    "doc_exceptions",
    "render_label",
    "resolve_path",
]

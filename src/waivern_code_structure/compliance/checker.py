"""Documentation compliance check over a Go file or directory tree."""

import logging
import os
import threading
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from waivern_code_structure.compliance.analyser import analyse_file
from waivern_code_structure.compliance.traversal import (
    ExcludeMode,
    RecurseDirective,
    TraverseArgs,
)
from waivern_code_structure.compliance.tree import SourceDirectory
from waivern_code_structure.compliance.violations import (
    DocException,
    DocExceptionKind,
)
from waivern_code_structure.compliance.walker import DirectoryWalker, FileParseFailure
from waivern_code_structure.errors import InvalidPathError, SourceTreeParseError

logger = logging.getLogger(__name__)

# Path suffix requesting a recursive walk, as in `./pkg/...`
RECURSIVE_SUFFIX = "..."

_README_FILENAME = "README.md"


class PathType(StrEnum):
    """What a checked path points at."""

    FILE = "file"
    DIRECTORY = "directory"


class DocExceptionsArgs(BaseModel):
    """Inputs of a documentation compliance check."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="File or directory to check; '...' suffix recurses")
    recurse: RecurseDirective = RecurseDirective.NOT_SPECIFIED
    exclude: list[str] = Field(default_factory=list)
    exclude_mode: ExcludeMode = ExcludeMode.USE_DEFAULTS
    exclude_patterns: list[str] | None = None
    fail_on_parse_error: bool = Field(
        default=False,
        description="Raise SourceTreeParseError instead of returning a partial result",
    )


class ResolvedPath(BaseModel):
    """A checked path after suffix handling and normalisation."""

    model_config = ConfigDict(frozen=True)

    path: Path
    path_type: PathType
    recurse: RecurseDirective

    @property
    def recursive(self) -> bool:
        """Whether sub-directories are walked and reported."""
        return self.recurse == RecurseDirective.DO_RECURSE


class DocExceptionsResult(BaseModel):
    """Violations found by a check plus any files that could not be parsed.

    ``is_partial`` is True when files were skipped, meaning the violations
    cover only the files that parsed.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    exceptions: list[DocException] = Field(default_factory=list)
    parse_failures: list[FileParseFailure] = Field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        """Whether any file was skipped because it failed to parse."""
        return bool(self.parse_failures)


def resolve_path(args: DocExceptionsArgs) -> ResolvedPath:
    """Resolve the path and recursion directive of a check.

    A trailing ``...`` forces recursion and is stripped; an empty remainder
    means the current directory. An unset directive defaults to recursive.
    A file is always checked on its own; a directory path is normalised.

    Args:
        args: Check inputs

    Returns:
        The resolved path

    Raises:
        InvalidPathError: If the path does not exist or is neither a file
            nor a directory

    """
    raw_path = args.path
    recurse = args.recurse
    if recurse == RecurseDirective.NOT_SPECIFIED:
        recurse = RecurseDirective.DO_RECURSE
    if raw_path.endswith(RECURSIVE_SUFFIX):
        recurse = RecurseDirective.DO_RECURSE
        raw_path = raw_path.removesuffix(RECURSIVE_SUFFIX) or "."

    path = Path(raw_path)
    if path.is_file():
        return ResolvedPath(
            path=path,
            path_type=PathType.FILE,
            recurse=RecurseDirective.DO_NOT_RECURSE,
        )
    if path.is_dir():
        return ResolvedPath(
            path=Path(os.path.normpath(raw_path)),
            path_type=PathType.DIRECTORY,
            recurse=recurse,
        )
    if path.exists():
        raise InvalidPathError(f"Path must be a file or directory: {args.path}")
    raise InvalidPathError(f"Path does not exist: {args.path}")


def doc_exceptions(
    args: DocExceptionsArgs, cancel: threading.Event | None = None
) -> DocExceptionsResult:
    """Check Go documentation compliance under a path.

    The source tree is built fresh on every call. Violations are ordered per
    directory: the missing README first (never reported for the checked
    root itself), then each file's violations, then sub-directories when
    recursing.

    Args:
        args: Check inputs
        cancel: Optional event; setting it stops the walk

    Returns:
        Violations plus any per-file parse failures

    Raises:
        InvalidPathError: If the path cannot be checked
        OperationCancelledError: If cancel was set during the walk
        SourceTreeParseError: If fail_on_parse_error is set and any file
            failed to parse; the partial result is attached

    """
    resolved = resolve_path(args)
    traverse_args = TraverseArgs(
        recurse=resolved.recurse,
        exclude=args.exclude,
        exclude_mode=args.exclude_mode,
        exclude_patterns=args.exclude_patterns,
    )
    walker = DirectoryWalker(traverse_args, cancel)

    logger.info(
        f"Checking Go documentation under {resolved.path} "
        f"({resolved.path_type}, recursive={resolved.recursive})"
    )
    if resolved.path_type == PathType.FILE:
        root = walker.walk_file(resolved.path)
    else:
        root = walker.walk(resolved.path)

    exceptions = collect_exceptions(root, resolved.recursive)
    result = DocExceptionsResult(
        path=str(resolved.path),
        exceptions=exceptions,
        parse_failures=walker.failures,
    )
    logger.info(
        f"Found {len(exceptions)} documentation violations in {resolved.path}"
    )

    if result.is_partial:
        if args.fail_on_parse_error:
            raise SourceTreeParseError(result.parse_failures, result)
        logger.warning(
            f"{len(result.parse_failures)} file(s) under {resolved.path} "
            f"could not be parsed; results are partial"
        )
    return result


def collect_exceptions(
    directory: SourceDirectory, recursive: bool
) -> list[DocException]:
    """Aggregate the violations of a directory node and, optionally, below it."""
    exceptions: list[DocException] = []
    if not directory.is_root and not directory.has_readme:
        exceptions.append(
            DocException(
                file=str(directory.path / _README_FILENAME),
                kind=DocExceptionKind.README,
            )
        )

    for source_file in directory.files:
        exceptions.extend(analyse_file(source_file))

    if recursive:
        for child in directory.subdirectories:
            exceptions.extend(collect_exceptions(child, recursive))
    return exceptions

"""Directory walker that builds a SourceDirectory tree of parsed Go files."""

import logging
import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from waivern_code_structure.compliance.traversal import TraverseArgs
from waivern_code_structure.compliance.tree import SourceDirectory, SourceFile
from waivern_code_structure.errors import OperationCancelledError, SourceSyntaxError

logger = logging.getLogger(__name__)

_GO_EXTENSION = ".go"
_README_NAME = "readme.md"


class FileParseFailure(BaseModel):
    """A Go file that could not be read or parsed during a walk."""

    model_config = ConfigDict(frozen=True)

    path: str
    message: str


class DirectoryWalker:
    """Walks a directory and builds its SourceDirectory tree.

    Entries are visited in name order. Files that fail to parse are recorded
    in ``failures`` and left out of the tree; the walk carries on.
    """

    def __init__(
        self, args: TraverseArgs, cancel: threading.Event | None = None
    ) -> None:
        """Initialise the walker.

        Args:
            args: Recursion and exclusion directives
            cancel: Optional event; once set, the walk stops with
                OperationCancelledError before the next entry

        """
        self._args = args
        self._cancel = cancel
        self._root = Path()
        self.failures: list[FileParseFailure] = []

    def walk(self, root: Path) -> SourceDirectory:
        """Walk a directory.

        Args:
            root: Directory to walk

        Returns:
            The root directory node

        Raises:
            OperationCancelledError: If cancellation was requested

        """
        self._root = root
        self.failures = []
        directory = SourceDirectory(root)
        self._walk_directory(directory)
        logger.debug(
            f"Walked {root}: {sum(len(d.files) for d in directory.walk())} Go files, "
            f"{len(self.failures)} parse failures"
        )
        return directory

    def walk_file(self, file_path: Path) -> SourceDirectory:
        """Build a one-file tree rooted at the file's directory.

        Args:
            file_path: Go file to parse

        Returns:
            Directory node holding just that file (or nothing if it failed)

        Raises:
            OperationCancelledError: If cancellation was requested

        """
        self._root = file_path.parent
        self.failures = []
        directory = SourceDirectory(file_path.parent)
        self._check_cancelled()
        self._add_go_file(directory, file_path)
        return directory

    def _walk_directory(self, directory: SourceDirectory) -> None:
        logger.debug(f"Walking directory {directory.path}")
        try:
            entries = sorted(directory.path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory.path}: {e}")
            self.failures.append(
                FileParseFailure(path=str(directory.path), message=str(e))
            )
            return

        for entry in entries:
            self._check_cancelled()
            relative_path = entry.relative_to(self._root).as_posix()

            if entry.is_symlink() and entry.is_dir():
                logger.debug(f"Skipping symlinked directory {entry}")
                continue

            if entry.is_dir():
                if self._args.should_exclude(entry.name, f"{relative_path}/"):
                    logger.debug(f"Excluding directory {entry}")
                    continue
                child = SourceDirectory(entry, parent=directory)
                if self._args.recursive:
                    self._walk_directory(child)
                directory.add_subdirectory(child)
                continue

            if entry.name.lower() == _README_NAME:
                directory.has_readme = True
                continue

            if entry.suffix.lower() != _GO_EXTENSION:
                continue

            if self._args.should_exclude(entry.name, relative_path):
                logger.debug(f"Excluding file {entry}")
                continue

            self._add_go_file(directory, entry)

    def _add_go_file(self, directory: SourceDirectory, path: Path) -> None:
        source_file = SourceFile(path, directory)
        try:
            source_file.parse()
        except (OSError, UnicodeDecodeError, SourceSyntaxError) as e:
            logger.warning(f"Skipping Go file {path}: {e}")
            self.failures.append(FileParseFailure(path=str(path), message=str(e)))
            return
        directory.add_file(source_file)

    def _check_cancelled(self) -> None:
        if self._cancel is not None and self._cancel.is_set():
            raise OperationCancelledError(f"Walk of {self._root} was cancelled")

"""Traversal directives and exclusion rules for directory walks."""

from enum import StrEnum
from typing import Any, Self

import pathspec
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class RecurseDirective(StrEnum):
    """Whether a walk descends into sub-directories."""

    NOT_SPECIFIED = "not_specified"
    DO_NOT_RECURSE = "do_not_recurse"
    DO_RECURSE = "do_recurse"

    @classmethod
    def from_bool(cls, recursive: bool) -> Self:
        """Map a boolean flag to a directive."""
        return cls.DO_RECURSE if recursive else cls.DO_NOT_RECURSE


class ExcludeMode(StrEnum):
    """How a caller's exclusion list combines with the defaults."""

    USE_DEFAULTS = "use_defaults"
    ADD_TO_DEFAULTS = "add_to_defaults"
    REPLACE_DEFAULTS = "replace_defaults"


DEFAULT_EXCLUDES: tuple[str, ...] = (
    ".git",
    "node_modules",
    ".svn",
    ".hg",
    ".bzr",
    "vendor",
    ".vscode",
    ".idea",
    "build",
    "dist",
    "target",
    "bin",
    "obj",
    ".DS_Store",
    "__pycache__",
    ".pytest_cache",
    "coverage",
    "tmp",
    "temp",
)


class TraverseArgs(BaseModel):
    """Directives for one directory walk.

    ``exclude`` holds entry names matched case-insensitively;
    ``exclude_patterns`` holds gitwildmatch patterns matched against paths
    relative to the walk root.
    """

    model_config = ConfigDict(frozen=True)

    recurse: RecurseDirective = RecurseDirective.DO_RECURSE
    exclude: list[str] = Field(default_factory=list)
    exclude_mode: ExcludeMode = ExcludeMode.USE_DEFAULTS
    exclude_patterns: list[str] | None = None

    _excluded_names: frozenset[str] = PrivateAttr(default=frozenset())
    _exclude_spec: pathspec.PathSpec | None = PrivateAttr(default=None)

    @property
    def recursive(self) -> bool:
        """Whether sub-directories are walked; unset means recursive."""
        return self.recurse != RecurseDirective.DO_NOT_RECURSE

    def effective_excludes(self) -> list[str]:
        """Combine the caller's exclusions with the defaults per exclude_mode."""
        match self.exclude_mode:
            case ExcludeMode.ADD_TO_DEFAULTS:
                return [*DEFAULT_EXCLUDES, *self.exclude]
            case ExcludeMode.REPLACE_DEFAULTS:
                return list(self.exclude)
            case _:
                return list(DEFAULT_EXCLUDES)

    def model_post_init(self, __context: Any) -> None:  # noqa: ANN401
        """Precompute the lookup structures used by should_exclude()."""
        self._excluded_names = frozenset(
            name.lower() for name in self.effective_excludes()
        )
        if self.exclude_patterns:
            self._exclude_spec = pathspec.PathSpec.from_lines(
                "gitwildmatch", self.exclude_patterns
            )

    def should_exclude(self, name: str, relative_path: str | None = None) -> bool:
        """Check whether a directory entry is excluded.

        Args:
            name: Entry name, matched case-insensitively against the
                effective exclusion list
            relative_path: Entry path relative to the walk root, matched
                against exclude_patterns (directories end with '/')

        Returns:
            True if the entry must be skipped

        """
        if name.lower() in self._excluded_names:
            return True
        if self._exclude_spec is not None and relative_path is not None:
            return self._exclude_spec.match_file(relative_path)
        return False

"""Configuration for the documentation compliance check."""

import threading
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from waivern_code_structure.compliance.checker import DocExceptionsArgs, doc_exceptions
from waivern_code_structure.compliance.report import (
    DEFAULT_CHAR_LIMIT,
    DocReport,
    build_report,
)
from waivern_code_structure.compliance.traversal import ExcludeMode, RecurseDirective
from waivern_code_structure.errors import DocCheckConfigError


class DocCheckConfig(BaseModel):
    """Documentation check configuration with Pydantic validation.

    Built from a raw property dictionary, typically supplied by whatever
    application embeds the check.
    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
    )

    path: str = Field(description="File or directory to check; '...' suffix recurses")
    recursive: bool | None = Field(
        default=None,
        description="Walk sub-directories. None = recurse unless path is a file",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Directory or file names to skip, matched case-insensitively",
    )
    exclude_mode: ExcludeMode = Field(
        default=ExcludeMode.USE_DEFAULTS,
        description="How exclude combines with the default exclusion list",
    )
    exclude_patterns: list[str] | None = Field(
        default=None,
        description="Gitwildmatch patterns matched against paths relative to path",
    )
    fail_on_parse_error: bool = Field(
        default=False,
        description="Fail instead of returning partial results on parse errors",
    )
    offset: int = Field(default=0, ge=0, description="Violations to skip in reports")
    char_limit: int = Field(
        default=DEFAULT_CHAR_LIMIT,
        gt=0,
        description="Maximum serialised report size in characters",
    )

    @field_validator("path")
    @classmethod
    def validate_path_not_empty(cls, v: str) -> str:
        """Reject an empty or blank path."""
        if not v.strip():
            raise ValueError("path property is required")
        return v.strip()

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a property dictionary.

        Args:
            properties: Raw configuration properties

        Returns:
            Validated configuration object

        Raises:
            DocCheckConfigError: If validation fails or path is missing

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            for error in e.errors():
                if error["loc"] == ("path",) and (
                    error["type"] == "missing"
                    or "path property is required" in error.get("msg", "")
                ):
                    raise DocCheckConfigError("path property is required") from e
            raise DocCheckConfigError(
                f"Invalid documentation check configuration: {e}"
            ) from e

    def to_args(self) -> DocExceptionsArgs:
        """Build the check inputs described by this configuration."""
        recurse = RecurseDirective.NOT_SPECIFIED
        if self.recursive is not None:
            recurse = RecurseDirective.from_bool(self.recursive)
        return DocExceptionsArgs(
            path=self.path,
            recurse=recurse,
            exclude=self.exclude,
            exclude_mode=self.exclude_mode,
            exclude_patterns=self.exclude_patterns,
            fail_on_parse_error=self.fail_on_parse_error,
        )

    def run(self, cancel: threading.Event | None = None) -> DocReport:
        """Run the check and return the page selected by offset and char_limit.

        Args:
            cancel: Optional event; setting it stops the walk

        Returns:
            The prioritised report page

        Raises:
            InvalidPathError: If the path cannot be checked
            OperationCancelledError: If cancel was set during the walk
            SourceTreeParseError: If fail_on_parse_error is set and any file
                failed to parse

        """
        result = doc_exceptions(self.to_args(), cancel)
        return build_report(
            result.path, result.exceptions, self.offset, self.char_limit
        )

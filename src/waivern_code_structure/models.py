"""Data models for locating and replacing source code constructs."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class PartArgs(BaseModel):
    """Input to locate, replace and validate operations.

    ``content`` must be a complete, independently parseable source unit,
    never a fragment.
    """

    model_config = ConfigDict(frozen=True)

    language: str = Field(description="Language identifier used to pick a processor")
    content: str = Field(description="Complete source text to operate on")
    part_type: str = Field(default="", description="Construct kind, e.g. 'func'")
    part_name: str = Field(default="", description="Construct name to target")
    new_content: str = Field(
        default="", description="Replacement text (replace operations only)"
    )
    file_path: str = Field(default="", description="Source path, diagnostics only")


class PartInfo(BaseModel):
    """Location of a construct within a source buffer.

    Lines are 1-based and inclusive. Offsets are 0-based UTF-8 byte offsets,
    start inclusive and end exclusive. When ``found`` is False every other
    field is zero-valued and carries no meaning.
    """

    model_config = ConfigDict(frozen=True)

    start_line: int = 0
    end_line: int = 0
    start_offset: int = 0
    end_offset: int = 0
    content: str = ""
    found: bool = False

    @classmethod
    def not_found(cls) -> Self:
        """Return the zero-valued result of an unsuccessful search."""
        return cls()


class ValidationResult(BaseModel):
    """Outcome of validating one file's syntax."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    language: str
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        """Whether the file parsed without errors."""
        return self.error is None

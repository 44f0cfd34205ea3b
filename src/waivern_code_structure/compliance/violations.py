"""Documentation compliance violation records."""

import logging
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

logger = logging.getLogger(__name__)


class DocExceptionKind(StrEnum):
    """Base kinds of documentation violations."""

    README = "readme"
    FILE = "file"
    FUNC = "func"
    TYPE = "type"
    CONST = "const"
    VAR = "var"


# Only const and var violations can be reported for a whole group
GROUPABLE_KINDS = frozenset({DocExceptionKind.CONST, DocExceptionKind.VAR})

_LABELS: dict[tuple[DocExceptionKind, bool], str] = {
    (DocExceptionKind.README, False): "Missing README.md file",
    (DocExceptionKind.FILE, False): "Missing file comment",
    (DocExceptionKind.FUNC, False): "Missing func comment",
    (DocExceptionKind.TYPE, False): "Missing type comment",
    (DocExceptionKind.CONST, False): "Missing const comment",
    (DocExceptionKind.VAR, False): "Missing var comment",
    (DocExceptionKind.CONST, True): "Missing const group comment",
    (DocExceptionKind.VAR, True): "Missing var group comment",
}


def render_label(kind: str, is_group: bool = False) -> str:
    """Return the human-readable label of a violation kind.

    An unknown combination should be impossible; it renders as an explicit
    "Invalid" label and is logged as an error.
    """
    try:
        return _LABELS[(DocExceptionKind(kind), is_group)]
    except (KeyError, ValueError):
        label = f"Invalid DocExceptionKind '{kind}' (group={is_group})"
        logger.error(label)
        return label


class DocException(BaseModel):
    """One documentation violation.

    Lines are 1-based. ``element`` is the offending name, empty when the
    violation is not name-addressable (a whole file or a missing README).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file: str
    kind: DocExceptionKind = Field(serialization_alias="type")
    line: int = 0
    end_line: int | None = None
    multi_name: bool = Field(default=False, serialization_alias="multi_line")
    element: str = ""
    is_group: bool = False

    @model_validator(mode="after")
    def validate_group_kind(self) -> Self:
        """Reject group-level violations for kinds that cannot be grouped."""
        if self.is_group and self.kind not in GROUPABLE_KINDS:
            raise ValueError(
                f"group-level violations only apply to const and var, not {self.kind}"
            )
        return self

    @computed_field
    @property
    def issue(self) -> str:
        """Human-readable label for this violation."""
        return render_label(self.kind, self.is_group)

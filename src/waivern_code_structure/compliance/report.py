"""Size-bounded, prioritised reports of documentation violations."""

import logging
import os
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from waivern_code_structure.compliance.violations import (
    DocException,
    DocExceptionKind,
)

logger = logging.getLogger(__name__)

# Maximum serialised report size, in characters
DEFAULT_CHAR_LIMIT = 90000

# Headroom kept when shrinking an oversized report
_SHRINK_MARGIN = 0.95

_SEVERITY: dict[DocExceptionKind, int] = {
    DocExceptionKind.FUNC: 1,
    DocExceptionKind.TYPE: 1,
    DocExceptionKind.CONST: 1,
    DocExceptionKind.VAR: 1,
    DocExceptionKind.FILE: 2,
    DocExceptionKind.README: 3,
}
_LOWEST_SEVERITY = 4


class DocIssue(BaseModel):
    """One violation as presented in a report, with a relative file path."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    end_line: int | None = None
    issue: str
    element: str
    multi_line: bool

    @classmethod
    def from_exception(cls, exception: DocException, base_path: str) -> Self:
        """Convert a violation, making its path relative to base_path."""
        file = exception.file
        if base_path and file.startswith(base_path):
            file = os.path.relpath(file, base_path)
        return cls(
            file=file,
            line=exception.line,
            end_line=exception.end_line,
            issue=exception.issue,
            element=exception.element,
            multi_line=exception.multi_name,
        )


class DocReport(BaseModel):
    """One page of prioritised violations that fits a size limit."""

    path: str
    issues: list[DocIssue] = Field(default_factory=list)
    returned_count: int = 0
    total_count: int = 0
    remaining_count: int = 0
    size_limited: bool = False
    response_size_chars: int = 0
    message: str | None = None

    def to_json(self) -> str:
        """Serialise the report, omitting unset optional fields."""
        return self.model_dump_json(exclude_none=True)


def severity(exception: DocException) -> int:
    """Return the priority of a violation; lower is more important."""
    return _SEVERITY.get(exception.kind, _LOWEST_SEVERITY)


def sort_by_priority(exceptions: list[DocException]) -> list[DocException]:
    """Order violations by severity, then file, then line."""
    return sorted(exceptions, key=lambda e: (severity(e), e.file, e.line))


def build_report(
    path: str,
    exceptions: list[DocException],
    offset: int = 0,
    char_limit: int = DEFAULT_CHAR_LIMIT,
) -> DocReport:
    """Build a prioritised report page that serialises within char_limit.

    Violations are sorted by priority and the first ``offset`` are skipped.
    When the page is too large, it is shrunk in proportion to how far it
    overshoots, always keeping at least one violation.

    Args:
        path: Base path of the check; violation paths are made relative to it
        exceptions: All violations found
        offset: Number of prioritised violations to skip
        char_limit: Maximum size of the serialised report

    Returns:
        The report page

    """
    total = len(exceptions)
    ordered = sort_by_priority(exceptions)
    page = ordered[offset:] if offset > 0 else ordered
    issues = [DocIssue.from_exception(e, path) for e in page]

    max_issues = len(issues)
    report = _make_report(path, issues, total, offset)
    while max_issues > 1:
        size = len(report.to_json())
        if size < char_limit:
            break
        shrunk = int(max_issues * (char_limit / size) * _SHRINK_MARGIN)
        max_issues = max(min(shrunk, max_issues - 1), 1)
        report = _make_report(path, issues[:max_issues], total, offset)

    size = len(report.to_json())
    if report.size_limited:
        logger.debug(
            f"Report for {path} limited to {report.returned_count} of {total} issues"
        )
    return report.model_copy(
        update={
            "response_size_chars": size,
            "message": _limit_message(report, size) if report.size_limited else None,
        }
    )


def _make_report(
    path: str, issues: list[DocIssue], total: int, offset: int
) -> DocReport:
    returned = len(issues)
    remaining = max(total - offset - returned, 0)
    return DocReport(
        path=path,
        issues=issues,
        returned_count=returned,
        total_count=total,
        remaining_count=remaining,
        size_limited=remaining > 0,
    )


def _limit_message(report: DocReport, size: int) -> str:
    return (
        f"Response limited to {report.returned_count} of {report.total_count} total "
        f"issues due to size constraints ({size} chars). Showing highest priority "
        f"issues first. {report.remaining_count} issues remaining. Run again with "
        f"a larger offset or after fixing current issues."
    )

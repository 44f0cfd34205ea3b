"""Tests for prioritised, size-bounded documentation reports."""

import json

from waivern_code_structure.compliance.report import (
    DocIssue,
    build_report,
    severity,
    sort_by_priority,
)
from waivern_code_structure.compliance.violations import (
    DocException,
    DocExceptionKind,
)

BASE = "/repo"


def _func(file: str, line: int, name: str = "Foo") -> DocException:
    return DocException(
        file=f"{BASE}/{file}", kind=DocExceptionKind.FUNC, line=line, element=name
    )


def _many(count: int) -> list[DocException]:
    return [_func(f"pkg/file_{i:03d}.go", i + 1, f"Func{i}") for i in range(count)]


class TestPriority:
    """Tests for severity and ordering."""

    def test_severity_levels(self) -> None:
        """Test that declarations outrank files, which outrank READMEs."""
        readme = DocException(file="/repo/a/README.md", kind=DocExceptionKind.README)
        file = DocException(file="/repo/a.go", kind=DocExceptionKind.FILE, line=1)
        const = DocException(file="/repo/a.go", kind=DocExceptionKind.CONST, line=3)

        assert severity(const) == 1
        assert severity(file) == 2
        assert severity(readme) == 3

    def test_sort_by_severity_file_then_line(self) -> None:
        """Test the three-level sort key."""
        readme = DocException(file="/repo/a/README.md", kind=DocExceptionKind.README)
        file = DocException(file="/repo/a.go", kind=DocExceptionKind.FILE, line=1)
        later = _func("b.go", 9)
        earlier = _func("b.go", 2)
        other_file = _func("a.go", 30)

        ordered = sort_by_priority([readme, file, later, earlier, other_file])

        assert ordered == [other_file, earlier, later, file, readme]


class TestDocIssue:
    """Tests for DocIssue.from_exception."""

    def test_path_relative_to_base(self) -> None:
        """Test that paths under the base become relative."""
        issue = DocIssue.from_exception(_func("pkg/a.go", 3), BASE)

        assert issue.file == "pkg/a.go"
        assert issue.line == 3
        assert issue.issue == "Missing func comment"
        assert issue.element == "Foo"
        assert issue.multi_line is False

    def test_path_outside_base_is_kept(self) -> None:
        """Test that unrelated paths are left as they are."""
        issue = DocIssue.from_exception(_func("pkg/a.go", 3), "/elsewhere")

        assert issue.file == "/repo/pkg/a.go"

    def test_group_end_line_is_carried(self) -> None:
        """Test that group violations keep their closing line."""
        group = DocException(
            file="/repo/a.go",
            kind=DocExceptionKind.VAR,
            line=4,
            end_line=8,
            is_group=True,
        )

        issue = DocIssue.from_exception(group, BASE)

        assert issue.end_line == 8
        assert issue.issue == "Missing var group comment"


class TestBuildReport:
    """Tests for build_report."""

    def test_everything_fits(self) -> None:
        """Test that a small result is returned whole without a message."""
        report = build_report(BASE, _many(3))

        assert report.returned_count == 3
        assert report.total_count == 3
        assert report.remaining_count == 0
        assert report.size_limited is False
        assert report.message is None
        assert "message" not in json.loads(report.to_json())
        assert report.response_size_chars > 0

    def test_empty_result(self) -> None:
        """Test a report for a compliant tree."""
        report = build_report(BASE, [])

        assert report.issues == []
        assert report.total_count == 0
        assert report.size_limited is False

    def test_issues_are_prioritised(self) -> None:
        """Test that the most important violations come first."""
        readme = DocException(file="/repo/a/README.md", kind=DocExceptionKind.README)

        report = build_report(BASE, [readme, _func("a.go", 1)])

        assert [i.file for i in report.issues] == ["a.go", "a/README.md"]

    def test_offset_skips_prioritised_issues(self) -> None:
        """Test that offset pages through the ordered violations."""
        report = build_report(BASE, _many(5), offset=2)

        assert [i.element for i in report.issues] == ["Func2", "Func3", "Func4"]
        assert report.returned_count == 3
        assert report.total_count == 5
        assert report.remaining_count == 0
        assert report.size_limited is False

    def test_offset_past_the_end(self) -> None:
        """Test that an offset beyond the total yields an empty page."""
        report = build_report(BASE, _many(2), offset=10)

        assert report.issues == []
        assert report.remaining_count == 0

    def test_oversized_report_is_shrunk(self) -> None:
        """Test that a report over the limit keeps only the top issues."""
        exceptions = _many(200)

        report = build_report(BASE, exceptions, char_limit=2000)

        assert 1 <= report.returned_count < 200
        assert report.response_size_chars < 2000
        assert report.size_limited is True
        assert report.remaining_count == 200 - report.returned_count
        assert [i.element for i in report.issues] == [
            f"Func{i}" for i in range(report.returned_count)
        ]
        assert report.message is not None
        assert report.message.startswith(
            f"Response limited to {report.returned_count} of 200 total issues"
        )
        assert f"{report.remaining_count} issues remaining" in report.message

    def test_at_least_one_issue_is_kept(self) -> None:
        """Test that a tiny limit still returns the top violation."""
        report = build_report(BASE, _many(5), char_limit=10)

        assert report.returned_count == 1
        assert report.issues[0].element == "Func0"
        assert report.remaining_count == 4
        assert report.size_limited is True

    def test_shrinking_respects_offset(self) -> None:
        """Test that remaining counts exclude skipped violations."""
        report = build_report(BASE, _many(50), offset=10, char_limit=10)

        assert report.issues[0].element == "Func10"
        assert report.remaining_count == 39

    def test_json_uses_wire_names(self) -> None:
        """Test the serialised report fields."""
        payload = json.loads(build_report(BASE, [_func("a.go", 2)]).to_json())

        assert payload["path"] == BASE
        assert payload["issues"] == [
            {
                "file": "a.go",
                "line": 2,
                "issue": "Missing func comment",
                "element": "Foo",
                "multi_line": False,
            }
        ]
        assert payload["returned_count"] == 1
        assert payload["size_limited"] is False

"""Tests for DocCheckConfig."""

from pathlib import Path

import pytest

from waivern_code_structure.compliance.config import DocCheckConfig
from waivern_code_structure.compliance.report import DEFAULT_CHAR_LIMIT
from waivern_code_structure.compliance.traversal import ExcludeMode, RecurseDirective
from waivern_code_structure.errors import DocCheckConfigError


class TestDocCheckConfigFromProperties:
    """Tests for DocCheckConfig.from_properties."""

    def test_minimal_properties(self) -> None:
        """Test that only path is required and defaults apply."""
        config = DocCheckConfig.from_properties({"path": "./pkg"})

        assert config.path == "./pkg"
        assert config.recursive is None
        assert config.exclude == []
        assert config.exclude_mode is ExcludeMode.USE_DEFAULTS
        assert config.exclude_patterns is None
        assert config.fail_on_parse_error is False
        assert config.offset == 0
        assert config.char_limit == DEFAULT_CHAR_LIMIT

    def test_path_is_stripped(self) -> None:
        """Test that surrounding whitespace is removed from path."""
        assert DocCheckConfig.from_properties({"path": "  src/ "}).path == "src/"

    @pytest.mark.parametrize("properties", [{}, {"path": ""}, {"path": "   "}])
    def test_missing_path(self, properties: dict[str, str]) -> None:
        """Test that a missing or blank path has a dedicated message."""
        with pytest.raises(DocCheckConfigError, match="path property is required"):
            DocCheckConfig.from_properties(properties)

    @pytest.mark.parametrize(
        "properties",
        [
            {"path": ".", "offset": -1},
            {"path": ".", "char_limit": 0},
            {"path": ".", "exclude_mode": "sometimes"},
            {"path": ".", "unknown": True},
        ],
    )
    def test_invalid_properties(self, properties: dict[str, object]) -> None:
        """Test that other validation failures are wrapped."""
        with pytest.raises(
            DocCheckConfigError, match="Invalid documentation check configuration"
        ):
            DocCheckConfig.from_properties(properties)

    def test_config_is_frozen(self) -> None:
        """Test that configuration cannot be modified after creation."""
        config = DocCheckConfig.from_properties({"path": "."})

        with pytest.raises(ValueError):
            config.path = "elsewhere"  # type: ignore[misc]


class TestDocCheckConfigToArgs:
    """Tests for DocCheckConfig.to_args."""

    @pytest.mark.parametrize(
        ("recursive", "expected"),
        [
            (None, RecurseDirective.NOT_SPECIFIED),
            (True, RecurseDirective.DO_RECURSE),
            (False, RecurseDirective.DO_NOT_RECURSE),
        ],
    )
    def test_recursive_maps_to_directive(
        self, recursive: bool | None, expected: RecurseDirective
    ) -> None:
        """Test the tri-state recursion mapping."""
        config = DocCheckConfig.from_properties({"path": ".", "recursive": recursive})

        assert config.to_args().recurse is expected

    def test_exclusions_are_passed_through(self) -> None:
        """Test that exclusion settings reach the check inputs."""
        config = DocCheckConfig.from_properties(
            {
                "path": "pkg/...",
                "exclude": ["gen"],
                "exclude_mode": "replace_defaults",
                "exclude_patterns": ["*_test.go"],
                "fail_on_parse_error": True,
            }
        )

        args = config.to_args()

        assert args.path == "pkg/..."
        assert args.exclude == ["gen"]
        assert args.exclude_mode is ExcludeMode.REPLACE_DEFAULTS
        assert args.exclude_patterns == ["*_test.go"]
        assert args.fail_on_parse_error is True


class TestDocCheckConfigRun:
    """Tests for DocCheckConfig.run."""

    def test_offset_and_char_limit_shape_the_report(self, tmp_path: Path) -> None:
        """Test that the report page follows the configured offset and limit."""
        source = "package demo\n\n" + "".join(
            f"func F{i}() {{}}\n" for i in range(10)
        )
        (tmp_path / "demo.go").write_text(source)
        config = DocCheckConfig.from_properties(
            {"path": str(tmp_path), "offset": 2, "char_limit": 10}
        )

        report = config.run()

        assert report.path == str(tmp_path)
        assert report.total_count == 11
        assert report.returned_count == 1
        assert report.issues[0].element == "F2"
        assert report.issues[0].file == "demo.go"
        assert report.remaining_count == 8
        assert report.size_limited is True

    def test_defaults_return_everything(self, tmp_path: Path) -> None:
        """Test that the default limit returns a small result whole."""
        (tmp_path / "demo.go").write_text("package demo\n\nfunc Foo() {}\n")

        report = DocCheckConfig.from_properties({"path": str(tmp_path)}).run()

        assert [i.element for i in report.issues] == ["Foo", ""]
        assert report.size_limited is False

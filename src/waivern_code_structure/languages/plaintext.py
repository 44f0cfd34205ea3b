"""Plain text processor for files with no language structure."""

from waivern_code_structure.errors import OperationNotSupportedError
from waivern_code_structure.models import PartArgs, PartInfo

_TEXT_EXTENSIONS = [".txt"]


class PlainTextProcessor:
    """Processor for plain text.

    Plain text has no constructs, so locating or replacing parts is refused
    and every content and syntax check passes.
    """

    @property
    def language(self) -> str:
        """Return the canonical language name."""
        return "none"

    @property
    def file_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return _TEXT_EXTENSIONS

    def supported_part_types(self) -> list[str]:
        """Plain text supports no part types."""
        return []

    def find_part(self, args: PartArgs) -> PartInfo:
        """Refuse: plain text has no parts."""
        raise OperationNotSupportedError(
            "find_part is not supported for plain text files; "
            "check supported_part_types() first"
        )

    def replace_part(self, args: PartArgs) -> str:
        """Refuse: plain text has no parts."""
        raise OperationNotSupportedError(
            "replace_part is not supported for plain text files; "
            "check supported_part_types() first"
        )

    def validate_content(self, args: PartArgs) -> None:
        """Accept any content."""

    def validate_syntax(self, source: str) -> None:
        """Accept any source."""

"""Protocols for language processor plugins."""

from typing import Protocol, runtime_checkable

from waivern_code_structure.models import PartArgs, PartInfo


@runtime_checkable
class Processor(Protocol):
    """Protocol for per-language construct processors.

    Each language implementation must provide:
    - A language identifier (e.g., 'go')
    - The file extensions it handles (e.g., ['.go'])
    - The construct kinds it can locate and replace
    - Locate, replace and validation operations over a full source buffer
    """

    @property
    def language(self) -> str:
        """Language identifier used as the registry key (e.g., 'go')."""
        ...

    @property
    def file_extensions(self) -> list[str]:
        """Supported file extensions including dot (e.g., ['.go'])."""
        ...

    def supported_part_types(self) -> list[str]:
        """Return the construct kinds this processor understands."""
        ...

    def find_part(self, args: PartArgs) -> PartInfo:
        """Locate a named construct.

        Args:
            args: Source content plus the kind and name of the target

        Returns:
            PartInfo describing the construct, with found=False if absent

        Raises:
            SourceSyntaxError: If the content does not parse
            UnsupportedPartTypeError: If the part type is unknown

        """
        ...

    def replace_part(self, args: PartArgs) -> str:
        """Replace a named construct and return the complete new source.

        Raises:
            PartNotFoundError: If the target does not exist
            ReplacementSyntaxError: If the edited source does not parse

        """
        ...

    def validate_content(self, args: PartArgs) -> None:
        """Check that replacement content has the shape of the target kind.

        Raises:
            ContentValidationError: If the shape does not match

        """
        ...

    def validate_syntax(self, source: str) -> None:
        """Check that source parses.

        Raises:
            SourceSyntaxError: If the source is invalid

        """
        ...

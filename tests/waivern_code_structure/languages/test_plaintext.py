"""Tests for PlainTextProcessor."""

import pytest

from waivern_code_structure.errors import OperationNotSupportedError
from waivern_code_structure.languages.plaintext import PlainTextProcessor
from waivern_code_structure.models import PartArgs
from waivern_code_structure.protocols import Processor


class TestPlainTextProcessor:
    """Tests for the plain text processor."""

    def test_identity(self) -> None:
        """Test the language name and extensions."""
        processor = PlainTextProcessor()

        assert processor.language == "none"
        assert processor.file_extensions == [".txt"]
        assert processor.supported_part_types() == []

    def test_implements_processor_protocol(self) -> None:
        """Test that PlainTextProcessor satisfies the Processor protocol."""
        assert isinstance(PlainTextProcessor(), Processor)

    def test_find_and_replace_are_refused(self) -> None:
        """Test that part operations raise instead of failing silently."""
        processor = PlainTextProcessor()
        args = PartArgs(language="none", content="hello", part_type="line")

        with pytest.raises(OperationNotSupportedError):
            processor.find_part(args)
        with pytest.raises(OperationNotSupportedError):
            processor.replace_part(args)

    def test_validation_always_passes(self) -> None:
        """Test that any content and source is accepted."""
        processor = PlainTextProcessor()

        processor.validate_content(PartArgs(language="none", content="{{{"))
        processor.validate_syntax("{{{ not code")

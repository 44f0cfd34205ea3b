"""Syntax validation of source files on disk."""

import logging
from pathlib import Path

from waivern_code_structure.detection import UNKNOWN_LANGUAGE, detect_language
from waivern_code_structure.errors import (
    CodeStructureError,
    LanguageNotSupportedError,
)
from waivern_code_structure.models import ValidationResult
from waivern_code_structure.registry import ProcessorRegistry

logger = logging.getLogger(__name__)

_DEFAULT_ENCODING = "utf-8"


def validate_file(
    registry: ProcessorRegistry, file_path: str | Path, language: str | None = None
) -> str:
    """Validate the syntax of a file.

    Args:
        registry: Registry used to resolve the language's processor
        file_path: File to read and validate
        language: Language to validate as; detected from the extension if None

    Returns:
        The language the file was validated as

    Raises:
        LanguageNotSupportedError: If the language has no processor
        SourceSyntaxError: If the file does not parse
        CodeStructureError: If the file cannot be read

    """
    path = Path(file_path)
    resolved = language or detect_language(path)
    if resolved == UNKNOWN_LANGUAGE:
        raise LanguageNotSupportedError(
            f"{resolved} (extension '{path.suffix}')", registry.list_languages()
        )
    processor = registry.get(resolved)

    try:
        content = path.read_text(encoding=_DEFAULT_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise CodeStructureError(f"Failed to read file {path}: {e}") from e

    processor.validate_syntax(content)
    return resolved


def validate_files(
    registry: ProcessorRegistry,
    file_paths: list[str | Path],
    language: str | None = None,
) -> list[ValidationResult]:
    """Validate many files, reporting each outcome instead of stopping early.

    Args:
        registry: Registry used to resolve processors
        file_paths: Files to validate
        language: Language to validate all files as; detected per file if None

    Returns:
        One ValidationResult per input path, in input order

    """
    results: list[ValidationResult] = []
    for file_path in file_paths:
        resolved = language or detect_language(file_path)
        try:
            resolved = validate_file(registry, file_path, language)
            results.append(
                ValidationResult(file_path=str(file_path), language=resolved)
            )
        except CodeStructureError as e:
            logger.debug(f"Validation failed for {file_path}: {e}")
            results.append(
                ValidationResult(
                    file_path=str(file_path), language=resolved, error=str(e)
                )
            )
    return results

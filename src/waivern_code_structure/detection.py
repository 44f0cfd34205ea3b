"""Language detection from file extensions."""

from pathlib import Path

UNKNOWN_LANGUAGE = "unknown"
NO_LANGUAGE = "none"

_EXTENSION_LANGUAGES = {
    ".go": "go",
    ".js": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".py": "python",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": NO_LANGUAGE,
}


def detect_language(file_path: str | Path) -> str:
    """Detect a language identifier from a file's extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier, 'none' for plain text or 'unknown'

    """
    extension = Path(file_path).suffix.lower()
    return _EXTENSION_LANGUAGES.get(extension, UNKNOWN_LANGUAGE)

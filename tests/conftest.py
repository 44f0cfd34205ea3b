"""Pytest configuration for waivern-code-structure tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from waivern_code_structure.registry import ProcessorRegistry, create_default_registry

WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def registry() -> ProcessorRegistry:
    """Provide a fresh registry with the built-in processors."""
    return create_default_registry()


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Provide a helper that writes a {relative path: content} tree under tmp_path.

    Returns the tree root. Parent directories are created as needed.
    """

    def _write(files: dict[str, str]) -> Path:
        for relative_path, content in files.items():
            target = tmp_path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write

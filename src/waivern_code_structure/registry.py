"""Processor registry for language-aware construct operations.

The registry is an explicit object built by the composing application and
passed to the code that needs it. Nothing registers itself at import time.
"""

import logging
import threading
from importlib.metadata import entry_points
from typing import TypedDict

from waivern_code_structure.errors import LanguageNotSupportedError
from waivern_code_structure.models import PartArgs, PartInfo
from waivern_code_structure.protocols import Processor

logger = logging.getLogger(__name__)

_ENTRY_POINT_GROUP = "waivern.code_structure.processors"


class ProcessorRegistryState(TypedDict):
    """State snapshot for ProcessorRegistry (used for test isolation)."""

    registry: dict[str, Processor]
    extension_map: dict[str, str]


class ProcessorRegistry:
    """Registry of language processors keyed by lower-cased language name.

    Registration is expected at start-up but lookups may run concurrently
    with it, so all access goes through a re-entrant lock.
    """

    def __init__(self) -> None:
        """Create an empty registry."""
        self._lock = threading.RLock()
        self._registry: dict[str, Processor] = {}
        self._extension_map: dict[str, str] = {}  # ".go" → "go"

    def register(self, processor: Processor) -> None:
        """Register a processor, replacing any previous one for its language.

        Args:
            processor: Processor implementation

        """
        key = processor.language.lower()
        with self._lock:
            if key in self._registry:
                logger.debug(f"Replacing processor registered for '{key}'")
            self._registry[key] = processor
            for ext in processor.file_extensions:
                self._extension_map[ext.lower()] = key

    def discover(self) -> None:
        """Register processors advertised through entry points.

        Entry point group: waivern.code_structure.processors

        Processors are validated by calling get_tree_sitter_language() when
        they expose it, so a processor whose grammar binding is not installed
        is skipped.
        """
        for ep in entry_points(group=_ENTRY_POINT_GROUP):
            try:
                processor_class = ep.load()
                processor = processor_class()
                binding = getattr(processor, "get_tree_sitter_language", None)
                if binding is not None:
                    binding()
                self.register(processor)
            except ImportError as e:
                logger.debug(f"Skipping processor entry point {ep.name}: {e}")

    def get(self, language: str) -> Processor:
        """Get the processor for a language (case-insensitive).

        Args:
            language: Language identifier (e.g., 'go', 'Go')

        Returns:
            Processor implementation

        Raises:
            LanguageNotSupportedError: If no processor is registered

        """
        with self._lock:
            processor = self._registry.get(language.lower())
            if processor is None:
                raise LanguageNotSupportedError(language, self.list_languages())
            return processor

    def get_by_extension(self, extension: str) -> Processor:
        """Get the processor for a file extension (case-insensitive).

        Args:
            extension: File extension including dot (e.g., '.go')

        Returns:
            Processor implementation

        Raises:
            LanguageNotSupportedError: If no processor handles the extension

        """
        with self._lock:
            key = self._extension_map.get(extension.lower())
            if key is None:
                raise LanguageNotSupportedError(extension, self.list_languages())
            return self._registry[key]

    def list_languages(self) -> list[str]:
        """List registered language identifiers (a new list on every call)."""
        with self._lock:
            return [p.language for p in self._registry.values()]

    def list_extensions(self) -> list[str]:
        """List all supported file extensions."""
        with self._lock:
            return list(self._extension_map.keys())

    def is_registered(self, language: str) -> bool:
        """Check if a language has a processor."""
        with self._lock:
            return language.lower() in self._registry

    def clear(self) -> None:
        """Remove every registered processor."""
        with self._lock:
            self._registry.clear()
            self._extension_map.clear()

    def snapshot_state(self) -> ProcessorRegistryState:
        """Capture current state for later restoration (test isolation)."""
        with self._lock:
            return {
                "registry": self._registry.copy(),
                "extension_map": self._extension_map.copy(),
            }

    def restore_state(self, state: ProcessorRegistryState) -> None:
        """Restore state from a previously captured snapshot."""
        with self._lock:
            self._registry = state["registry"].copy()
            self._extension_map = state["extension_map"].copy()


def create_default_registry() -> ProcessorRegistry:
    """Build a registry holding the built-in Go and plain-text processors."""
    from waivern_code_structure.languages.golang import GoProcessor
    from waivern_code_structure.languages.plaintext import PlainTextProcessor

    registry = ProcessorRegistry()
    registry.register(GoProcessor())
    registry.register(PlainTextProcessor())
    return registry


def get_supported_part_types(registry: ProcessorRegistry, language: str) -> list[str]:
    """Return the part types supported for a language."""
    return registry.get(language).supported_part_types()


def find_part(registry: ProcessorRegistry, args: PartArgs) -> PartInfo:
    """Locate a construct using the processor registered for args.language."""
    return registry.get(args.language).find_part(args)


def replace_part(registry: ProcessorRegistry, args: PartArgs) -> str:
    """Replace a construct using the processor registered for args.language."""
    return registry.get(args.language).replace_part(args)


def edit_part(registry: ProcessorRegistry, args: PartArgs) -> str:
    """Shape-check args.new_content, then replace the construct.

    Args:
        registry: Registry used to resolve args.language
        args: Full source, target kind and name, and the replacement text

    Returns:
        The complete modified source

    Raises:
        ContentValidationError: If new_content does not fit the part type
        PartNotFoundError: If the target does not exist
        ReplacementSyntaxError: If the edited source does not parse

    """
    processor = registry.get(args.language)
    processor.validate_content(args)
    return processor.replace_part(args)


def validate_syntax(registry: ProcessorRegistry, language: str, source: str) -> None:
    """Validate source using the processor registered for a language."""
    registry.get(language).validate_syntax(source)

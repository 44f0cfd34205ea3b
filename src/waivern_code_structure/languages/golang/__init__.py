"""Go language support."""

from waivern_code_structure.languages.golang.processor import (
    GoPartType,
    GoProcessor,
    qualified_func_name,
    receiver_type_name,
)
from waivern_code_structure.languages.golang.syntax import (
    GoSyntaxTree,
    go_language,
    parse_go,
)

__all__ = [
    "GoPartType",
    "GoProcessor",
    "GoSyntaxTree",
    "go_language",
    "parse_go",
    "qualified_func_name",
    "receiver_type_name",
]

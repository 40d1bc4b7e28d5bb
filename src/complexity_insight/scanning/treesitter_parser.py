"""Tree-sitter parser wrapper for Go sources.

Handles a missing tree-sitter installation gracefully: check
TREE_SITTER_AVAILABLE, or ``is_language_supported("go")``, before parsing.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "go")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

# Try to import tree-sitter
TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_language_modules: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True

    try:
        import tree_sitter_go

        _language_modules["go"] = tree_sitter_go
    except ImportError:
        pass

except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class Node:
        type: str
        is_named: bool
        is_missing: bool
        has_error: bool
        start_byte: int
        end_byte: int
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        children: list[Node]
        named_children: list[Node]

        def child_by_field_name(self, name: str) -> Node | None: ...

        def children_by_field_name(self, name: str) -> list[Node]: ...

    class Tree:
        root_node: Node


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_modules.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter parsers for the installed grammars.

    A parser instance is not safe to share between threads; create one
    per worker.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for lang_name, lang_module in _language_modules.items():
            try:
                # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
                lang_obj = _tree_sitter_module.Language(lang_module.language())
                self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Cannot load tree-sitter grammar for {lang_name}: {e}")

    def parse(self, code: bytes, language: str) -> Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Language name (e.g., "go")

        Returns:
            Tree object, or None if the language is not supported
            or tree-sitter is not available
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None
        result: Tree = parser.parse(code)
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers

"""Go front end: discovery, tree-sitter parsing, conversion and resolution."""

from .discover import GoPackage, PathFilter, discover_go_files
from .go_converter import GoTreeConverter
from .go_lexicon import GO_CLASSIFIER, GoLexicalClassifier
from .go_resolver import GoResolver
from .loader import load_source, load_sources
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser, get_supported_languages

__all__ = [
    "GoPackage",
    "PathFilter",
    "discover_go_files",
    "GoTreeConverter",
    "GO_CLASSIFIER",
    "GoLexicalClassifier",
    "GoResolver",
    "load_source",
    "load_sources",
    "TREE_SITTER_AVAILABLE",
    "TreeSitterParser",
    "get_supported_languages",
]

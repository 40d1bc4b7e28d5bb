"""Read, parse, convert and resolve Go files in parallel."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from ..exceptions import FileAccessError, ParsingError, UnsupportedLanguageError
from ..metrics.models import SourceFile
from .go_converter import GoTreeConverter
from .go_lexicon import GO_CLASSIFIER
from .go_resolver import GoResolver
from .treesitter_parser import TreeSitterParser, get_supported_languages

logger = logging.getLogger(__name__)

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

_local = threading.local()


def _thread_parser() -> TreeSitterParser:
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = TreeSitterParser()
        _local.parser = parser
    return parser


def load_source(path: Path) -> SourceFile:
    """Parse one Go file into a SourceFile.

    Raises:
        UnsupportedLanguageError: If the Go grammar is not installed.
        FileAccessError: If the file cannot be read.
        ParsingError: If the file does not parse cleanly.
    """
    parser = _thread_parser()
    if not parser.is_language_supported("go"):
        raise UnsupportedLanguageError("go", get_supported_languages())

    try:
        source = path.read_bytes()
    except OSError as e:
        raise FileAccessError(path, str(e))

    tree = parser.parse(source, "go")
    if tree is None:
        raise ParsingError(path, "go", "parser returned no tree")

    try:
        root = GoTreeConverter(source, str(path)).convert(tree)
        bindings = GoResolver(root).resolve()
    except RecursionError:
        raise ParsingError(path, "go", "syntax nested too deeply") from None
    return SourceFile(
        path=str(path),
        root=root,
        classifier=GO_CLASSIFIER,
        resolver=bindings,
    )


def load_sources(paths: Sequence[Path], workers: Optional[int] = None) -> list[SourceFile]:
    """Load files in parallel, returning them in input order.

    The first failure aborts the load and is re-raised.
    """
    if len(paths) < 2:
        return [load_source(p) for p in paths]

    with ThreadPoolExecutor(max_workers=workers or _DEFAULT_WORKERS) as executor:
        sources = list(executor.map(load_source, paths))
    logger.debug(f"Loaded {len(sources)} files")
    return sources

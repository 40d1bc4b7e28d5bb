"""Go source discovery from command-line patterns.

Patterns follow the go tool:

    path/to/file.go   a single file (files sharing a directory form one package)
    path/to/dir       the package in that directory, non-recursive
    path/to/dir/...   every package below dir

Recursive patterns skip ``testdata`` and ``vendor`` directories and
directories starting with ``.`` or ``_``. Files starting with ``.`` or ``_``
are ignored like the go tool does, ``_test.go`` files only count when tests
are enabled, and the ``skip_files``/``skip_dirs`` regexes of the config drop
matching files.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ..config import AnalysisConfig
from ..exceptions import InvalidPathError

logger = logging.getLogger(__name__)

GO_EXTENSION = ".go"
TEST_SUFFIX = "_test.go"
RECURSIVE_SUFFIX = "..."

_SKIPPED_DIR_NAMES = frozenset({"testdata", "vendor"})


@dataclass
class GoPackage:
    """Files of one directory, analyzed together as one pass."""

    directory: Path
    files: list[Path] = field(default_factory=list)


def normalize_path_pattern(pattern: str) -> str:
    """Make a ``/``-separated regex match native paths."""
    if os.sep == "/":
        return pattern
    return pattern.replace("/", re.escape(os.sep))


class PathFilter:
    """Skip rules from the config, applied to paths relative to ``base``."""

    def __init__(self, config: AnalysisConfig, base: Optional[Path] = None):
        self.include_tests = config.include_tests
        self.base = base or Path.cwd()
        self._skip_files = [re.compile(normalize_path_pattern(p)) for p in config.skip_files]
        self._skip_dirs = [re.compile(normalize_path_pattern(p)) for p in config.skip_dirs]

    def _relative(self, path: Path) -> str:
        try:
            return str(path.resolve().relative_to(self.base.resolve()))
        except ValueError:
            return str(path)

    def accepts(self, path: Path) -> bool:
        name = path.name
        if not name.endswith(GO_EXTENSION) or name.startswith((".", "_")):
            return False
        if name.endswith(TEST_SUFFIX) and not self.include_tests:
            return False
        relative = self._relative(path)
        if any(r.search(relative) for r in self._skip_files):
            logger.debug(f"Skipping {relative}: matches skip-files")
            return False
        if any(r.search(os.path.dirname(relative)) for r in self._skip_dirs):
            logger.debug(f"Skipping {relative}: matches skip-dirs")
            return False
        return True


def _go_files(directory: Path) -> list[Path]:
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(GO_EXTENSION)
    )


def _walk_packages(root: Path) -> list[Path]:
    """Directories below ``root`` (inclusive), in sorted walk order."""
    result = []
    for dirpath, dirnames, _ in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if d not in _SKIPPED_DIR_NAMES and not d.startswith((".", "_"))
        )
        result.append(Path(dirpath))
    return result


def discover_go_files(
    patterns: Sequence[str], config: AnalysisConfig, base: Optional[Path] = None
) -> list[GoPackage]:
    """Expand patterns into packages of Go files.

    Args:
        patterns: Files, directories or ``dir/...`` patterns.
        config: Supplies the test switch and skip regexes.
        base: Directory that skip regexes are relative to (default: cwd).

    Returns:
        Packages in pattern order, each file appearing once.

    Raises:
        InvalidPathError: If a pattern does not exist or nothing matched.
    """
    path_filter = PathFilter(config, base)
    packages: dict[Path, GoPackage] = {}
    seen: set[Path] = set()
    found_any = False

    def add(directory: Path, candidates: list[Path]) -> None:
        nonlocal found_any
        if candidates:
            found_any = True
        for path in candidates:
            key = path.resolve()
            if key in seen or not path_filter.accepts(path):
                continue
            seen.add(key)
            packages.setdefault(directory, GoPackage(directory)).files.append(path)

    for pattern in patterns:
        if pattern == RECURSIVE_SUFFIX or pattern.endswith("/" + RECURSIVE_SUFFIX):
            root = Path(pattern[: -len(RECURSIVE_SUFFIX)] or ".")
            if not root.is_dir():
                raise InvalidPathError(root, "no such directory")
            for directory in _walk_packages(root):
                add(directory, _go_files(directory))
        else:
            path = Path(pattern)
            if path.is_dir():
                add(path, _go_files(path))
            elif path.is_file():
                if not path.name.endswith(GO_EXTENSION):
                    raise InvalidPathError(path, "not a Go source file")
                add(path.parent, [path])
            else:
                raise InvalidPathError(path, "no such file or directory")

    if not found_any:
        raise InvalidPathError(Path(" ".join(patterns)), "matched no Go packages")

    result = [pkg for pkg in packages.values() if pkg.files]
    logger.debug(f"Discovered {sum(len(p.files) for p in result)} files in {len(result)} packages")
    return result

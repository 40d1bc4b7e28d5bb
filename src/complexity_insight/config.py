"""Configuration loading and management for Complexity Insight.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in AnalysisConfig / ThresholdConfig)
    2. Config file (golangci-lint layout, YAML/JSON/TOML)
    3. Environment variables (COMPLEXITY_* prefix)
    4. Overrides (passed as kwargs, typically from CLI flags)

A config file looks like:

    linters-settings:
      complexity:
        cyclo-over: 15
        maint-under: 30
    run:
      tests: false
      skip-dirs:
        - generated
      skip-files:
        - ".*_mock\\.go$"

Example:
    >>> config = load_config(cyclo_over=5, verbose=True)
    >>> config.thresholds.cyclo_over
    5
    >>> config.verbosity
    'verbose'
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

import yaml

from .exceptions import InvalidConfigError, InvalidPathError

Verbosity = Literal["quiet", "normal", "verbose"]

OUTPUT_FORMATS = ("txt", "csv", "checkstyle", "table", "diagnostics")
VERBOSITY_LEVELS = ("quiet", "normal", "verbose")

ENV_PREFIX = "COMPLEXITY_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Flagging thresholds.

    Attributes:
        cyclo_over: Functions with cyclomatic complexity above this are too complex.
        maint_under: Functions with maintainability index below this are not maintainable.
    """

    cyclo_over: int = 10
    maint_under: int = 20

    def __post_init__(self) -> None:
        if self.cyclo_over < 0:
            raise InvalidConfigError("cyclo_over", self.cyclo_over, "must be non-negative")
        if self.maint_under < 0:
            raise InvalidConfigError("maint_under", self.maint_under, "must be non-negative")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        thresholds: Flagging thresholds.
        skip_files: Regexes matched against file paths relative to the
            working directory; matching files are skipped.
        skip_dirs: Regexes matched against the directory part of those paths.
        include_tests: Also analyze ``_test.go`` files.
        output_format: One of OUTPUT_FORMATS.
        workers: Parallel parse workers (None = auto-detect).
        verbosity: Logging verbosity level.
    """

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    skip_files: tuple[str, ...] = ()
    skip_dirs: tuple[str, ...] = ()
    include_tests: bool = False
    output_format: str = "txt"
    workers: Optional[int] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format",
                self.output_format,
                f"expected one of {', '.join(OUTPUT_FORMATS)}",
            )
        if self.verbosity not in VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(VERBOSITY_LEVELS)}"
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        for key in ("skip_files", "skip_dirs"):
            for pattern in getattr(self, key):
                try:
                    re.compile(pattern)
                except re.error as e:
                    raise InvalidConfigError(key, pattern, f"can't compile regexp: {e}")


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load and merge configuration.

    Args:
        config_file: Optional config file (.yaml, .yml, .json or .toml).
        **overrides: Direct overrides. ``cyclo_over`` and ``maint_under`` go
            to the thresholds; ``verbose``/``quiet`` set the verbosity;
            ``None`` values are ignored.

    Returns:
        Validated AnalysisConfig instance.

    Raises:
        InvalidPathError: If the config file does not exist.
        InvalidConfigError: If any source holds an invalid value.
    """
    merged: dict[str, Any] = {}
    thresholds: dict[str, Any] = {}

    # 1. Config file
    if config_file is not None:
        file_settings, file_thresholds = _load_config_file(Path(config_file))
        merged.update(file_settings)
        thresholds.update(file_thresholds)

    # 2. Environment variables
    env_settings, env_thresholds = _load_env_vars()
    merged.update(env_settings)
    thresholds.update(env_thresholds)

    # 3. Overrides
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    for key in ("cyclo_over", "maint_under"):
        if key in overrides:
            thresholds[key] = overrides.pop(key)
    for key in ("skip_files", "skip_dirs"):
        if key in overrides:
            overrides[key] = tuple(overrides[key])
    merged.update(overrides)

    try:
        return AnalysisConfig(thresholds=ThresholdConfig(**thresholds), **merged)
    except TypeError as e:
        # Unknown field
        raise InvalidConfigError("overrides", ", ".join(sorted(merged)), str(e))


def _load_config_file(path: Path) -> tuple[dict[str, Any], dict[str, Any]]:
    """Parse a golangci-lint style config file.

    Returns:
        (analysis settings, threshold settings)
    """
    if not path.exists():
        raise InvalidPathError(path, "config file not found")

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        elif suffix == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        elif suffix == ".toml":
            data = _load_toml_file(path)
        else:
            raise InvalidConfigError(
                "config_file",
                str(path),
                "unsupported file type for configuration file (yaml,yml,toml,json)",
            )
    except (yaml.YAMLError, json.JSONDecodeError, ValueError) as e:
        raise InvalidConfigError("config_file", str(path), str(e))
    except OSError as e:
        raise InvalidPathError(path, str(e))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError("config_file", str(path), "top level must be a mapping")

    settings: dict[str, Any] = {}
    thresholds: dict[str, Any] = {}

    complexity = _section(data, "linters-settings", path).get("complexity") or {}
    if "cyclo-over" in complexity:
        thresholds["cyclo_over"] = _as_int("cyclo-over", complexity["cyclo-over"])
    if "maint-under" in complexity:
        thresholds["maint_under"] = _as_int("maint-under", complexity["maint-under"])

    run = _section(data, "run", path)
    if "skip-files" in run:
        settings["skip_files"] = _as_patterns("skip-files", run["skip-files"])
    if "skip-dirs" in run:
        settings["skip_dirs"] = _as_patterns("skip-dirs", run["skip-dirs"])
    if "tests" in run:
        settings["include_tests"] = bool(run["tests"])

    return settings, thresholds


def _section(data: dict, key: str, path: Path) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidConfigError(key, value, f"must be a mapping in {path}")
    return value


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(key, value, "expected an integer")
    return value


def _as_patterns(key: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise InvalidConfigError(key, value, "expected a list of regular expressions")
    return tuple(value)


def _load_env_vars() -> tuple[dict[str, Any], dict[str, Any]]:
    """Load configuration from COMPLEXITY_* environment variables.

    Supported environment variables:
        COMPLEXITY_CYCLO_OVER: int
        COMPLEXITY_MAINT_UNDER: int
        COMPLEXITY_INCLUDE_TESTS: bool (true/false/1/0)
        COMPLEXITY_OUTPUT_FORMAT: txt/csv/checkstyle/table/diagnostics
        COMPLEXITY_WORKERS: int
        COMPLEXITY_VERBOSITY: quiet/normal/verbose

    Returns:
        (analysis settings, threshold settings) for any variables found.
    """
    settings = _collect_env(AnalysisConfig, skip={"thresholds", "skip_files", "skip_dirs"})
    thresholds = _collect_env(ThresholdConfig, skip=set())
    return settings, thresholds


def _collect_env(cls: type, skip: set[str]) -> dict[str, Any]:
    type_hints = get_type_hints(cls)
    result: dict[str, Any] = {}

    for f in fields(cls):
        if f.name in skip:
            continue
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[f.name] = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If the value can't be parsed to the expected type.
    """
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        type_hint = next(t for t in args if t is not type(None))

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.10
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)

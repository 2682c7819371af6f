"""
Configuration loader for docs-sentinel.

Reads `.docs-sentinel.json` from the project root and resolves it against
the built-in defaults into one immutable SentinelConfig per invocation.
A broken config file never stops a command: it is logged and the defaults
are used instead.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from .constants import (
    CONFIG_FILENAME,
    DEFAULT_ARCHIVE_THRESHOLD_DAYS,
    DEFAULT_DOCS_DIR,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_PATH_PREFIXES,
    DEFAULT_STALE_THRESHOLD_DAYS,
    SOURCE_EXTENSIONS,
)

logger = logging.getLogger(__name__)

PROJECT_MARKERS = (".git", "pyproject.toml", "package.json")


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or malformed."""
    pass


@dataclass(frozen=True)
class SentinelConfig:
    docs_dir: str = DEFAULT_DOCS_DIR
    ignore: Tuple[str, ...] = ()
    stale_threshold_days: int = DEFAULT_STALE_THRESHOLD_DAYS
    archive_threshold_days: int = DEFAULT_ARCHIVE_THRESHOLD_DAYS
    path_prefixes: Optional[Tuple[str, ...]] = None
    source_extensions: Optional[Tuple[str, ...]] = None
    frontmatter_key: Optional[str] = None
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    @property
    def prefixes(self) -> Tuple[str, ...]:
        return self.path_prefixes if self.path_prefixes is not None else DEFAULT_PATH_PREFIXES

    @property
    def extensions(self) -> FrozenSet[str]:
        if self.source_extensions is not None:
            return frozenset(self.source_extensions)
        return SOURCE_EXTENSIONS

    @property
    def docs_prefix(self) -> str:
        """docs_dir as a normalized relative path, e.g. "docs"."""
        docs_dir = self.docs_dir.replace("\\", "/").rstrip("/")
        if docs_dir.startswith("./"):
            docs_dir = docs_dir[2:]
        return "" if docs_dir == "." else docs_dir

    def with_docs_dir(self, docs_dir: str) -> "SentinelConfig":
        return replace(self, docs_dir=docs_dir)

    def to_json(self) -> Dict[str, Any]:
        """camelCase mapping as stored in .docs-sentinel.json."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[_FIELD_TO_KEY[f.name]] = list(value) if isinstance(value, tuple) else value
        return data


DEFAULT_CONFIG = SentinelConfig()

# JSON key -> (field name, expected type)
_KEYS: Dict[str, Tuple[str, str]] = {
    "docsDir": ("docs_dir", "str"),
    "ignore": ("ignore", "list"),
    "staleThresholdDays": ("stale_threshold_days", "int"),
    "archiveThresholdDays": ("archive_threshold_days", "int"),
    "pathPrefixes": ("path_prefixes", "list"),
    "sourceExtensions": ("source_extensions", "list"),
    "frontmatterKey": ("frontmatter_key", "str"),
    "maxFileSize": ("max_file_size", "int"),
}
_FIELD_TO_KEY = {name: key for key, (name, _) in _KEYS.items()}

# Fields that may be explicitly null in the file
_NULLABLE = {"path_prefixes", "source_extensions", "frontmatter_key"}


def _coerce(value: Any, kind: str) -> Any:
    if kind == "str":
        if isinstance(value, str) and value:
            return value
    elif kind == "int":
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
    elif kind == "list":
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return tuple(value)
    raise ValueError(f"expected {kind}, got {value!r}")


def resolve_config(
    partial: Optional[Mapping[str, Any]],
    defaults: SentinelConfig = DEFAULT_CONFIG,
) -> SentinelConfig:
    """
    Resolve a partial config mapping over the defaults.

    Unknown keys are ignored. A value of the wrong type keeps the default
    and logs a warning.
    """
    if not partial:
        return defaults

    overrides: Dict[str, Any] = {}
    for key, value in partial.items():
        if key not in _KEYS:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue

        name, kind = _KEYS[key]
        if value is None and name in _NULLABLE:
            overrides[name] = None
            continue

        try:
            overrides[name] = _coerce(value, kind)
        except ValueError as e:
            logger.warning(f"Invalid value for {key} in {CONFIG_FILENAME} ({e}), using default")

    return replace(defaults, **overrides)


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read the raw JSON object from a config file."""
    try:
        raw = config_path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")
    return data


def load_config(project_root: Path) -> SentinelConfig:
    """Load the project's config, falling back to defaults on any error."""
    config_path = Path(project_root) / CONFIG_FILENAME
    if not config_path.exists():
        return DEFAULT_CONFIG

    try:
        return resolve_config(read_config_file(config_path))
    except ConfigError as e:
        logger.warning(f"{e}; using defaults")
        return DEFAULT_CONFIG


def write_config(project_root: Path, config: SentinelConfig) -> Path:
    config_path = Path(project_root) / CONFIG_FILENAME
    config_path.write_text(json.dumps(config.to_json(), indent=2) + "\n", encoding="utf-8")
    return config_path


def find_project_root(start: Path) -> Optional[Path]:
    """Nearest directory at or above start holding a project marker."""
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return None

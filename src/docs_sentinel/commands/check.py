"""
`docs-sentinel check` - list the docs that reference one source file.

Meant to run from editor and agent hooks after every write, so it prints
nothing at all unless some doc is affected.
"""

import logging
import os
from datetime import date
from fnmatch import fnmatch
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..checker import check_file
from ..config import SentinelConfig, load_config
from ..constants import DOC_GLOBS
from ..models import CheckResult
from ..paths import normalize_path
from ..reporters import format_check_json, render_check

logger = logging.getLogger(__name__)


def resolve_source_path(file: str, project_root: Path) -> str:
    """Project-relative, normalized form of a path given on the command line."""
    if os.path.isabs(file):
        file = os.path.relpath(file, project_root)
    return normalize_path(file)


def is_inside_docs_dir(source_file: str, config: SentinelConfig) -> bool:
    prefix = config.docs_prefix
    if not prefix:
        # Docs live at the project root; only doc files themselves count
        return any(fnmatch(source_file.rsplit("/", 1)[-1], glob) for glob in DOC_GLOBS)
    return source_file == prefix or source_file.startswith(prefix + "/")


def run_check(
    project_root: Path,
    file: str,
    console: Console,
    output_format: str = "terminal",
    today: Optional[date] = None,
) -> Optional[CheckResult]:
    """Returns the check result, or None when the file is itself a doc."""
    project_root = Path(project_root)
    config = load_config(project_root)
    source_file = resolve_source_path(file, project_root)

    if is_inside_docs_dir(source_file, config):
        logger.debug(f"{source_file} is inside the docs dir, nothing to check")
        return None

    result = check_file(source_file, project_root, config, today)
    if not result.affected_docs:
        return result

    if output_format == "json":
        console.out(format_check_json(result), highlight=False)
    else:
        render_check(result, console)
    return result

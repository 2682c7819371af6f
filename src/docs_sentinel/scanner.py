"""
Document scanner - find and parse every doc under the configured docs dir.

Files that are too large, hidden, ignored, or not valid UTF-8 are skipped
silently (logged at debug level); a missing docs dir is an empty scan.
"""

import os
import logging
from datetime import date
from fnmatch import fnmatch, fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .config import DEFAULT_CONFIG, SentinelConfig
from .constants import DOC_GLOBS
from .frontmatter import parse_frontmatter
from .models import Document

logger = logging.getLogger(__name__)


def _match_segments(parts: List[str], pattern: List[str]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        # zero or more whole segments
        return any(_match_segments(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_segments(parts[1:], rest)


def glob_match(relative: str, pattern: str) -> bool:
    """Match a posix path against a glob whose "*" stays within one segment."""
    return _match_segments(relative.split("/"), pattern.strip("/").split("/"))


def _is_ignored(relative: str, patterns: Iterable[str]) -> bool:
    return any(glob_match(relative, pattern) for pattern in patterns)


def _is_ignored_dir(relative: str, patterns: Iterable[str]) -> bool:
    for pattern in patterns:
        if glob_match(relative, pattern):
            return True
        if pattern.endswith("/**") and glob_match(relative, pattern[:-3]):
            return True
    return False


def iter_doc_files(docs_dir: Path, ignore: Iterable[str] = ()) -> Iterator[Path]:
    """Yield markdown files under docs_dir in a stable order."""
    ignore = tuple(ignore)
    for root, dirs, files in os.walk(docs_dir):
        base = Path(root).relative_to(docs_dir).as_posix()
        prefix = "" if base == "." else base + "/"
        dirs[:] = sorted(
            d for d in dirs
            if not d.startswith(".") and not _is_ignored_dir(prefix + d, ignore)
        )
        for name in sorted(files):
            if name.startswith("."):
                continue
            if not any(fnmatch(name, glob) for glob in DOC_GLOBS):
                continue
            if _is_ignored(prefix + name, ignore):
                continue
            yield Path(root) / name


def read_document_text(file_path: Path, max_file_size: int) -> Optional[str]:
    """Read a doc as UTF-8, or None if it is too large or unreadable."""
    try:
        if file_path.stat().st_size > max_file_size:
            logger.debug(f"Skipping {file_path}: larger than {max_file_size} bytes")
            return None
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return None


def scan_docs(
    project_root: Path,
    config: SentinelConfig = DEFAULT_CONFIG,
    today: Optional[date] = None,
) -> List[Document]:
    """Scan the docs dir and return one Document per readable file."""
    project_root = Path(project_root)
    docs_dir = project_root / config.docs_prefix
    if not docs_dir.is_dir():
        logger.debug(f"Docs dir not found: {docs_dir}")
        return []

    docs: List[Document] = []
    for file_path in iter_doc_files(docs_dir, config.ignore):
        raw = read_document_text(file_path, config.max_file_size)
        if raw is None:
            continue

        relative = file_path.relative_to(docs_dir).as_posix()
        relative_path = f"{config.docs_prefix}/{relative}" if config.docs_prefix else relative
        parsed = parse_frontmatter(raw, config.frontmatter_key, today)

        docs.append(Document(
            file_path=str(file_path),
            relative_path=relative_path,
            raw_content=raw,
            content=parsed.body,
            has_metadata=parsed.is_valid,
            has_structured_block=parsed.has_structured_block,
            metadata=parsed.metadata,
        ))

    return docs


def scan_docs_with_refs(
    project_root: Path,
    config: SentinelConfig = DEFAULT_CONFIG,
    today: Optional[date] = None,
) -> List[Document]:
    """Only documents that carry our metadata with at least one reference."""
    return [
        doc for doc in scan_docs(project_root, config, today)
        if doc.has_metadata and doc.metadata.references
    ]

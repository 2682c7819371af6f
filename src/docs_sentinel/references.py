"""
Reference extraction - recover source file paths from free-form doc text.

Extraction is a pipeline of small text stages. Order matters: every noise
stage removes a class of false positives that the path patterns would
otherwise match, so the stages run in exactly this order:

    1. strip_code_blocks   fenced ``` and ~~~ blocks
    2. strip_urls          absolute http(s) URLs
    3. strip_tree_lines    lines drawn with box characters (tree diagrams)
    4. strip_import_lines  MDX/JSX import/export lines
    5. match_candidates    prefix-anchored path patterns + named files
    6. resolve_candidate   ./ and ../ against the document's directory
    7. placeholder filter  anything with { or }
    8. is_known_file       extension or named-file allow list
"""

import re
import posixpath
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Set, Tuple

from .constants import DEFAULT_PATH_PREFIXES, NAMED_FILES, SOURCE_EXTENSIONS
from .paths import normalize_path

FENCED_BACKTICKS = re.compile(r"```.*?```", re.DOTALL)
FENCED_TILDES = re.compile(r"~~~.*?~~~", re.DOTALL)
URL_PATTERN = re.compile(r"https?://[^\s)>]+")
BOX_DRAWING = re.compile(r"[├└│─┬┤┼┐┘┌]")
IMPORT_LINE = re.compile(r"^(?:import|export)\s+")

# Optional ./ or ../ lead in front of a known prefix
RELATIVE_LEAD = r"(?:\.{1,2}/)*"


# =============================================================================
# Noise removal stages
# =============================================================================

def strip_code_blocks(text: str) -> str:
    text = FENCED_BACKTICKS.sub("", text)
    return FENCED_TILDES.sub("", text)


def strip_urls(text: str) -> str:
    return URL_PATTERN.sub("", text)


def strip_tree_lines(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if not BOX_DRAWING.search(line))


def strip_import_lines(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if not IMPORT_LINE.match(line.strip()))


# =============================================================================
# Path recognition
# =============================================================================

@lru_cache(maxsize=32)
def build_patterns(prefixes: Tuple[str, ...]) -> List[Pattern]:
    """Path patterns anchored to the given prefixes: backtick, bare, link."""
    prefix_alt = "|".join(re.escape(p) for p in prefixes)
    anchored = RELATIVE_LEAD + "(?:" + prefix_alt + ")"
    return [
        # `src/foo/bar.ts`
        re.compile("`(" + anchored + r"[^`\s]+)`"),
        # src/foo/bar.ts as a bare token
        re.compile(r"(?:^|\s)(" + anchored + r"\S+\.\w+)", re.MULTILINE),
        # [text](src/foo/bar.ts)
        re.compile(r"\[[^\]]*\]\((" + anchored + r"[^)\s]+)\)"),
    ]


@lru_cache(maxsize=32)
def build_named_file_patterns(prefixes: Tuple[str, ...]) -> List[Pattern]:
    """Patterns for extensionless build files, e.g. deploy/Dockerfile."""
    prefix_alt = "|".join(re.escape(p) for p in prefixes)
    return [
        re.compile(
            r"(?:^|[`\s])(" + RELATIVE_LEAD + "(?:" + prefix_alt + r"))([\w/.-]*" + re.escape(name) + r")(?![\w-]|\.\w)",
            re.MULTILINE,
        )
        for name in sorted(NAMED_FILES)
    ]


def match_candidates(text: str, prefixes: Iterable[str] = DEFAULT_PATH_PREFIXES) -> Set[str]:
    """Raw path-like matches in already de-noised text."""
    prefixes = tuple(p for p in prefixes if p)
    if not prefixes:
        return set()

    candidates: Set[str] = set()
    for pattern in build_patterns(prefixes):
        for match in pattern.finditer(text):
            if match.group(1):
                candidates.add(match.group(1))

    for pattern in build_named_file_patterns(prefixes):
        for match in pattern.finditer(text):
            candidates.add(match.group(1) + match.group(2))

    return candidates


def resolve_candidate(ref: str, doc_path: Optional[str] = None) -> Optional[str]:
    """
    Turn a raw match into a normalized project-relative path.

    "./x" and "../x" are resolved against the directory of the document
    that contains them. Returns None when the result escapes the project.
    """
    ref = ref.replace("\\", "/").split("#", 1)[0]
    if doc_path and ref.startswith(("./", "../")):
        doc_dir = posixpath.dirname(normalize_path(doc_path))
        ref = posixpath.normpath(posixpath.join(doc_dir, ref))

    resolved = normalize_path(ref)
    if not resolved or resolved == ".." or resolved.startswith("../"):
        return None
    return resolved


def is_placeholder(ref: str) -> bool:
    return "{" in ref or "}" in ref


def is_known_file(ref: str, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> bool:
    basename = ref.rsplit("/", 1)[-1]
    if basename in NAMED_FILES:
        return True
    ext = posixpath.splitext(basename)[1]
    return ext != "" and ext in extensions


def extract_references(
    text: str,
    prefixes: Optional[Iterable[str]] = None,
    extensions: Optional[Iterable[str]] = None,
    doc_path: Optional[str] = None,
) -> Set[str]:
    """
    Extract the set of project file paths a document body refers to.

    Args:
        text: Document body (front matter already stripped)
        prefixes: Recognized path prefixes (defaults to DEFAULT_PATH_PREFIXES)
        extensions: Recognized file extensions (defaults to SOURCE_EXTENSIONS)
        doc_path: Project-relative path of the document, used to resolve
            "./" and "../" references

    Returns:
        Deduplicated set of normalized paths, in no particular order
    """
    prefixes = tuple(prefixes) if prefixes is not None else DEFAULT_PATH_PREFIXES
    extensions = frozenset(extensions) if extensions is not None else SOURCE_EXTENSIONS

    text = strip_code_blocks(text)
    text = strip_urls(text)
    text = strip_tree_lines(text)
    text = strip_import_lines(text)

    refs: Set[str] = set()
    for candidate in match_candidates(text, prefixes):
        resolved = resolve_candidate(candidate, doc_path)
        if resolved is None or is_placeholder(resolved):
            continue
        if is_known_file(resolved, extensions):
            refs.add(resolved)

    return refs


# =============================================================================
# Validation against the filesystem
# =============================================================================

def validate_references(project_root: Path, refs: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split refs into (existing, missing) relative to the project root."""
    root = Path(project_root)
    existing: List[str] = []
    missing: List[str] = []

    for ref in refs:
        if (root / ref).exists():
            existing.append(ref)
        else:
            missing.append(ref)

    return existing, missing

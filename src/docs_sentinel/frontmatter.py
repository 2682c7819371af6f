"""
Front matter model - parse, generate and merge the YAML block at the top
of a document.

A block can be ours (it carries `status` or `references`), foreign (a site
generator or CMS block that happens to use the same `---` delimiters), or
absent. Parsing returns that distinction as a tagged value so callers never
have to sniff fields again:

    Owned(metadata, fields)   docs-sentinel metadata, plus the whole block
    Foreign(fields)           a block we do not own; pass it through intact
    Absent()                  no usable block at all

Merging only ever touches the fields docs-sentinel owns.
"""

import re
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import yaml

from .constants import (
    CATEGORIES,
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORY,
    DEFAULT_STATUS,
    FEATURE_DIR_PATTERN,
    OWNED_FIELDS,
    STATUSES,
)
from .models import Metadata
from .paths import normalize_path
from .utils import parse_iso_date

logger = logging.getLogger(__name__)

FRONTMATTER_BLOCK = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
TICKET_DIR = re.compile(r"/T-\d+")


# =============================================================================
# Parse results
# =============================================================================

@dataclass(frozen=True)
class Owned:
    metadata: Metadata
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Foreign:
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Absent:
    pass


Block = Union[Owned, Foreign, Absent]


@dataclass(frozen=True)
class ParseResult:
    block: Block
    body: str

    @property
    def is_valid(self) -> bool:
        """True when the block carries docs-sentinel metadata."""
        return isinstance(self.block, Owned)

    @property
    def has_structured_block(self) -> bool:
        """True for any YAML block, ours or foreign."""
        return isinstance(self.block, (Owned, Foreign))

    @property
    def metadata(self) -> Optional[Metadata]:
        return self.block.metadata if isinstance(self.block, Owned) else None


# =============================================================================
# Parsing
# =============================================================================

def split_frontmatter(raw: str) -> Tuple[Optional[str], str]:
    """Split raw text into (yaml block or None, body)."""
    match = FRONTMATTER_BLOCK.match(raw)
    if not match:
        return None, raw
    return match.group(1), raw[match.end():]


def _coerce_references(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    refs = []
    for item in value:
        if not isinstance(item, str):
            continue
        ref = normalize_path(item.strip())
        if not ref or "{" in ref or "}" in ref or ref in refs:
            continue
        refs.append(ref)
    return tuple(refs)


def _coerce_metadata(data: Dict[str, Any], today: date) -> Metadata:
    status = data.get("status")
    if status not in STATUSES:
        if status is not None:
            logger.debug(f"Unknown status {status!r}, using {DEFAULT_STATUS}")
        status = DEFAULT_STATUS

    category = data.get("category")
    if category not in CATEGORIES:
        if category is not None:
            logger.debug(f"Unknown category {category!r}, using {DEFAULT_CATEGORY}")
        category = DEFAULT_CATEGORY

    feature = data.get("feature")
    if not isinstance(feature, str) or not feature:
        feature = None

    raw_verified = data.get("last_verified")
    verified = parse_iso_date(raw_verified)
    if verified is not None:
        last_verified = verified.isoformat()
    elif isinstance(raw_verified, str):
        # Kept as written; the auditor reports it instead of guessing
        last_verified = raw_verified
    else:
        last_verified = today.isoformat()

    return Metadata(
        status=status,
        category=category,
        feature=feature,
        references=_coerce_references(data.get("references")),
        last_verified=last_verified,
    )


def parse_frontmatter(
    raw: str,
    frontmatter_key: Optional[str] = None,
    today: Optional[date] = None,
) -> ParseResult:
    """
    Parse the front matter block of a document.

    Malformed YAML, an empty block, and a block that is not a mapping all
    count as no metadata; the body is then the raw text, untouched. TOML
    (+++) blocks are not supported and count as no metadata either.
    """
    today = today or date.today()

    if raw.startswith("+++"):
        return ParseResult(Absent(), raw)

    block, body = split_frontmatter(raw)
    if block is None:
        return ParseResult(Absent(), raw)

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        logger.debug(f"Unparseable front matter, treating as absent: {e}")
        return ParseResult(Absent(), raw)

    if not isinstance(data, dict) or not data:
        # An empty "---\n---" pair is dropped; anything else (a horizontal
        # rule pair around prose) is body text
        return ParseResult(Absent(), body if not block.strip() else raw)

    inspected = data.get(frontmatter_key) if frontmatter_key else data
    if not isinstance(inspected, dict) or not inspected:
        return ParseResult(Foreign(data), body)

    if inspected.get("status") is None and inspected.get("references") is None:
        return ParseResult(Foreign(data), body)

    return ParseResult(Owned(_coerce_metadata(inspected, today), data), body)


# =============================================================================
# Generation
# =============================================================================

def infer_category(relative_path: str, content: str) -> str:
    """Guess a category from the filename, then the directory, then the content."""
    filename = relative_path.rsplit("/", 1)[-1]
    for keyword, category in CATEGORY_KEYWORDS.items():
        if keyword in filename:
            return category

    if "/ticket" in relative_path.lower() or TICKET_DIR.search(relative_path):
        return "ticket"

    head = content[:500].lower()
    if "# ticket" in head:
        return "ticket"
    if "## architecture" in head or "# adr" in head:
        return "architecture"

    return DEFAULT_CATEGORY


def infer_feature(relative_path: str) -> Optional[str]:
    match = FEATURE_DIR_PATTERN.search(relative_path)
    return match.group(1) if match else None


def generate_frontmatter(
    relative_path: str,
    content: str,
    refs: Iterable[str],
    today: Optional[date] = None,
) -> Metadata:
    """Fresh metadata for a document that has none."""
    today = today or date.today()
    return Metadata(
        status=DEFAULT_STATUS,
        category=infer_category(relative_path, content),
        feature=infer_feature(relative_path),
        references=tuple(sorted(set(refs))),
        last_verified=today.isoformat(),
    )


# =============================================================================
# Merge and serialization
# =============================================================================

def serialize_frontmatter(
    fields: Dict[str, Any],
    body: str,
    frontmatter_key: Optional[str] = None,
) -> str:
    """
    Render a front matter mapping and body back into document text.

    Owned fields set to None are dropped; foreign fields are written back
    exactly as they were loaded.
    """
    cleaned = dict(fields)
    if frontmatter_key and isinstance(cleaned.get(frontmatter_key), dict):
        cleaned[frontmatter_key] = {
            k: v for k, v in cleaned[frontmatter_key].items()
            if not (k in OWNED_FIELDS and v is None)
        }
    elif not frontmatter_key:
        cleaned = {k: v for k, v in cleaned.items() if not (k in OWNED_FIELDS and v is None)}

    dumped = yaml.safe_dump(cleaned, sort_keys=False, default_flow_style=False, allow_unicode=True)
    if body and not body.endswith("\n"):
        body += "\n"
    return f"---\n{dumped}---\n{body}"


def render_document(metadata: Metadata, body: str, frontmatter_key: Optional[str] = None) -> str:
    """Document text for freshly generated metadata on top of a body."""
    data = metadata.to_dict()
    fields = {frontmatter_key: data} if frontmatter_key else data
    return serialize_frontmatter(fields, body, frontmatter_key)


def merge_frontmatter(
    raw: str,
    new_refs: Iterable[str],
    frontmatter_key: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """
    Merge docs-sentinel fields into a document's existing block.

    Every field we do not own is preserved. status and category keep their
    current values (or get defaults), last_verified becomes today, and
    references are replaced only when new_refs is non-empty; an empty
    extraction never wipes a curated list.
    """
    today = today or date.today()

    if raw.startswith("+++"):
        return raw

    block, body = split_frontmatter(raw)
    if block is None:
        fields: Dict[str, Any] = {}
        body = raw
    else:
        try:
            loaded = yaml.safe_load(block)
        except yaml.YAMLError as e:
            logger.warning(f"Leaving document untouched, front matter does not parse: {e}")
            return raw
        if loaded is None:
            loaded = {}
            if block.strip():
                body = raw
        if not isinstance(loaded, dict):
            logger.warning("Leaving document untouched, front matter is not a mapping")
            return raw
        fields = dict(loaded)

    if frontmatter_key:
        existing = fields.get(frontmatter_key)
        target = dict(existing) if isinstance(existing, dict) else {}
        fields[frontmatter_key] = target
    else:
        target = fields

    refs = sorted(set(new_refs))
    if target.get("status") is None:
        target["status"] = DEFAULT_STATUS
    if target.get("category") is None:
        target["category"] = DEFAULT_CATEGORY
    if refs:
        target["references"] = refs
    elif target.get("references") is None:
        target["references"] = []
    target["last_verified"] = today.isoformat()

    return serialize_frontmatter(fields, body, frontmatter_key)

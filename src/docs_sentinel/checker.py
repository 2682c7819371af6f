"""
Reverse reference index - which docs point at a given source file?
"""

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from .config import DEFAULT_CONFIG, SentinelConfig
from .models import AffectedDoc, CheckResult, Document
from .paths import normalize_path
from .scanner import scan_docs_with_refs
from .utils import days_between, parse_iso_date

logger = logging.getLogger(__name__)

ReferenceIndex = Dict[str, List[Document]]


def build_reference_index(docs: List[Document]) -> ReferenceIndex:
    """Map each normalized reference to the docs that list it."""
    index: ReferenceIndex = {}
    for doc in docs:
        if not doc.has_metadata:
            continue
        for ref in doc.metadata.references:
            index.setdefault(normalize_path(ref), []).append(doc)
    return index


def lookup(path: str, index: ReferenceIndex) -> List[Document]:
    """
    Docs referencing path.

    An exact key wins. Only without one, keys are matched by suffix in
    either direction, so "auth.ts" finds "src/auth.ts" and an absolute-ish
    "repo/src/auth.ts" finds it too.
    """
    normalized = normalize_path(path)
    if not normalized:
        return []

    exact = index.get(normalized)
    if exact:
        return list(exact)

    results: List[Document] = []
    seen = set()
    for key, docs in index.items():
        # plain string suffix: "auth.ts" also matches "src/oauth.ts"
        if not (normalized.endswith(key) or key.endswith(normalized)):
            continue
        for doc in docs:
            if doc.relative_path in seen:
                continue
            seen.add(doc.relative_path)
            results.append(doc)
    return results


def check_file(
    source_file: str,
    project_root: Path,
    config: SentinelConfig = DEFAULT_CONFIG,
    today: Optional[date] = None,
) -> CheckResult:
    """Report every doc that references source_file and how long ago it was verified."""
    today = today or date.today()
    docs = scan_docs_with_refs(project_root, config, today)
    index = build_reference_index(docs)

    affected: List[AffectedDoc] = []
    for doc in lookup(source_file, index):
        verified = parse_iso_date(doc.metadata.last_verified)
        affected.append(AffectedDoc(
            doc_path=doc.relative_path,
            last_verified=doc.metadata.last_verified,
            days_since_verified=days_between(verified, today) if verified else None,
            status=doc.metadata.status,
        ))

    logger.debug(f"{source_file}: {len(affected)} affected docs")
    return CheckResult(source_file=source_file, affected_docs=affected)

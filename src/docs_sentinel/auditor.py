"""
Audit engine - cross-reference every doc against the filesystem and
history, and boil the result down to a single health score.
"""

import logging
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Dict, List, Optional

from .config import DEFAULT_CONFIG, SentinelConfig
from .constants import ARCHIVABLE_STATUSES
from .history import HistoryResolver
from .models import AuditResult, Document, OrphanedRef, StaleDoc
from .references import validate_references
from .scanner import scan_docs
from .utils import days_between, parse_iso_date

logger = logging.getLogger(__name__)

PENALTY_WITHOUT_METADATA = 2
PENALTY_STALE = 3
PENALTY_ORPHANED = 1


def compute_health_score(total: int, without_metadata: int, stale: int, orphaned: int) -> int:
    """100 minus penalties, clamped to [0, 100]. No docs scores 100."""
    if total == 0:
        return 100
    score = 100
    score -= without_metadata * PENALTY_WITHOUT_METADATA
    score -= stale * PENALTY_STALE
    score -= orphaned * PENALTY_ORPHANED
    return max(0, min(100, score))


def find_orphaned_refs(docs: List[Document], missing: set) -> List[OrphanedRef]:
    orphaned = []
    for doc in docs:
        for ref in doc.metadata.references:
            if ref in missing:
                orphaned.append(OrphanedRef(doc_path=doc.relative_path, missing_ref=ref))
    return orphaned


def changed_since(refs, verified: date, dates: Dict[str, datetime]) -> List[str]:
    """References whose last change is after the start of the verification day."""
    cutoff = datetime.combine(verified, time.min, tzinfo=timezone.utc)
    return [ref for ref in refs if ref in dates and dates[ref] > cutoff]


def audit_docs(
    project_root: Path,
    config: SentinelConfig = DEFAULT_CONFIG,
    no_git: bool = False,
    today: Optional[date] = None,
    resolver: Optional[HistoryResolver] = None,
) -> AuditResult:
    """
    Run a full documentation audit.

    Args:
        project_root: Root the doc references are relative to
        config: Resolved configuration
        no_git: Use filesystem mtimes instead of git history
        today: Reference date for staleness (defaults to today)
        resolver: History resolver to use instead of a fresh one

    Returns:
        AuditResult snapshot
    """
    project_root = Path(project_root)
    today = today or date.today()

    docs = scan_docs(project_root, config, today)
    owned = [doc for doc in docs if doc.has_metadata]
    without_metadata = [doc.relative_path for doc in docs if not doc.has_metadata]

    all_refs = sorted({ref for doc in owned for ref in doc.metadata.references})
    existing, missing = validate_references(project_root, all_refs)
    orphaned_refs = find_orphaned_refs(owned, set(missing))

    if resolver is None:
        resolver = HistoryResolver(project_root, use_git=not no_git)
    dates = resolver.resolve_all(existing)

    stale_docs: List[StaleDoc] = []
    archivable_docs: List[str] = []

    for doc in owned:
        verified = parse_iso_date(doc.metadata.last_verified)
        if verified is None:
            logger.warning(
                f"{doc.relative_path}: last_verified {doc.metadata.last_verified!r} is not a date, skipping"
            )
            continue

        days_since = days_between(verified, today)

        if days_since >= config.stale_threshold_days:
            stale_docs.append(StaleDoc(
                doc_path=doc.relative_path,
                last_verified=doc.metadata.last_verified,
                days_since_verified=days_since,
                changed_references=changed_since(doc.metadata.references, verified, dates),
            ))

        if doc.metadata.status in ARCHIVABLE_STATUSES and days_since >= config.archive_threshold_days:
            archivable_docs.append(doc.relative_path)

    health_score = compute_health_score(
        len(docs),
        len(without_metadata),
        len(stale_docs),
        len(orphaned_refs),
    )

    logger.info(
        f"Audited {len(docs)} docs: {len(stale_docs)} stale, "
        f"{len(orphaned_refs)} orphaned refs, score {health_score}"
    )

    return AuditResult(
        total_docs=len(docs),
        docs_with_metadata=len(owned),
        docs_without_metadata=without_metadata,
        stale_docs=stale_docs,
        orphaned_refs=orphaned_refs,
        archivable_docs=archivable_docs,
        health_score=health_score,
    )

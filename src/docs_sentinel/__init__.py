"""
docs-sentinel: documentation reference tracking and freshness auditing.

Public API:
    scan_docs / scan_docs_with_refs   find and parse docs
    extract_references                recover source paths from doc text
    check_file / build_reference_index
    audit_docs / compute_health_score
"""

__version__ = "0.1.0"

from .auditor import audit_docs, compute_health_score
from .checker import build_reference_index, check_file, lookup
from .config import DEFAULT_CONFIG, ConfigError, SentinelConfig, load_config, resolve_config
from .frontmatter import (
    generate_frontmatter,
    infer_category,
    infer_feature,
    merge_frontmatter,
    parse_frontmatter,
)
from .history import HistoryError, HistoryMode, HistoryResolver
from .models import (
    AffectedDoc,
    AuditResult,
    CheckResult,
    Document,
    InitResult,
    Metadata,
    OrphanedRef,
    StaleDoc,
)
from .paths import normalize_path
from .references import extract_references, validate_references
from .scanner import scan_docs, scan_docs_with_refs

__all__ = [
    "__version__",
    "audit_docs",
    "compute_health_score",
    "build_reference_index",
    "check_file",
    "lookup",
    "DEFAULT_CONFIG",
    "ConfigError",
    "SentinelConfig",
    "load_config",
    "resolve_config",
    "generate_frontmatter",
    "infer_category",
    "infer_feature",
    "merge_frontmatter",
    "parse_frontmatter",
    "HistoryError",
    "HistoryMode",
    "HistoryResolver",
    "AffectedDoc",
    "AuditResult",
    "CheckResult",
    "Document",
    "InitResult",
    "Metadata",
    "OrphanedRef",
    "StaleDoc",
    "normalize_path",
    "extract_references",
    "validate_references",
    "scan_docs",
    "scan_docs_with_refs",
]

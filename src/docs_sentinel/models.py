"""
Value records passed between the scanner, checker, auditor and reporters.

Every record is frozen: a scan builds fresh records and writers produce new
document text instead of mutating what was scanned.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Metadata:
    """The docs-sentinel fields carried in a document's front matter."""
    status: str
    category: str
    references: Tuple[str, ...]
    last_verified: str
    feature: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire mapping in canonical key order, without an absent feature."""
        data: Dict[str, Any] = {
            "status": self.status,
            "category": self.category,
        }
        if self.feature:
            data["feature"] = self.feature
        data["references"] = list(self.references)
        data["last_verified"] = self.last_verified
        return data


@dataclass(frozen=True)
class Document:
    """A single scanned documentation file."""
    file_path: str
    relative_path: str
    raw_content: str
    content: str
    has_metadata: bool
    has_structured_block: bool
    metadata: Optional[Metadata] = None

    def __post_init__(self):
        if self.has_metadata and self.metadata is None:
            raise ValueError(f"{self.relative_path}: has_metadata requires metadata")


@dataclass(frozen=True)
class StaleDoc:
    doc_path: str
    last_verified: str
    days_since_verified: int
    changed_references: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class OrphanedRef:
    doc_path: str
    missing_ref: str


@dataclass(frozen=True)
class AuditResult:
    """Point-in-time health snapshot of a documentation tree."""
    total_docs: int
    docs_with_metadata: int
    docs_without_metadata: List[str]
    stale_docs: List[StaleDoc]
    orphaned_refs: List[OrphanedRef]
    archivable_docs: List[str]
    health_score: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditResult":
        return cls(
            total_docs=data["total_docs"],
            docs_with_metadata=data["docs_with_metadata"],
            docs_without_metadata=list(data["docs_without_metadata"]),
            stale_docs=[
                StaleDoc(
                    doc_path=s["doc_path"],
                    last_verified=s["last_verified"],
                    days_since_verified=s["days_since_verified"],
                    changed_references=list(s.get("changed_references", [])),
                )
                for s in data["stale_docs"]
            ],
            orphaned_refs=[OrphanedRef(**o) for o in data["orphaned_refs"]],
            archivable_docs=list(data["archivable_docs"]),
            health_score=data["health_score"],
        )


@dataclass(frozen=True)
class AffectedDoc:
    doc_path: str
    last_verified: str
    days_since_verified: Optional[int]
    status: str


@dataclass(frozen=True)
class CheckResult:
    """Documents that reference one source file."""
    source_file: str
    affected_docs: List[AffectedDoc]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckResult":
        return cls(
            source_file=data["source_file"],
            affected_docs=[AffectedDoc(**d) for d in data["affected_docs"]],
        )


@dataclass(frozen=True)
class InitResult:
    docs_scanned: int = 0
    metadata_added: int = 0
    metadata_skipped: int = 0
    tools_configured: List[str] = field(default_factory=list)
    config_created: bool = False

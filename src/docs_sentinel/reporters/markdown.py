from typing import List

from ..models import AuditResult


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def format_audit_markdown(result: AuditResult) -> str:
    """Audit report as a Markdown document, suitable for a PR comment or CI artifact."""
    lines: List[str] = [
        "# Documentation Health Report",
        "",
        f"**Health Score:** {result.health_score}/100",
        "",
        "## Summary",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Total docs | {result.total_docs} |",
        f"| With metadata | {result.docs_with_metadata} |",
        f"| Without metadata | {len(result.docs_without_metadata)} |",
        f"| Stale | {len(result.stale_docs)} |",
        f"| Orphaned refs | {len(result.orphaned_refs)} |",
        f"| Archivable | {len(result.archivable_docs)} |",
    ]

    if result.stale_docs:
        lines += [
            "",
            "## Stale Documents",
            "",
            "| Document | Last Verified | Days | Changed References |",
            "|----------|---------------|------|--------------------|",
        ]
        for doc in result.stale_docs:
            changed = ", ".join(f"`{ref}`" for ref in doc.changed_references) or "-"
            lines.append(
                f"| {_escape_cell(doc.doc_path)} | {doc.last_verified} "
                f"| {doc.days_since_verified} | {_escape_cell(changed)} |"
            )

    if result.orphaned_refs:
        lines += [
            "",
            "## Orphaned References",
            "",
            "| Document | Missing Reference |",
            "|----------|-------------------|",
        ]
        for ref in result.orphaned_refs:
            lines.append(f"| {_escape_cell(ref.doc_path)} | `{_escape_cell(ref.missing_ref)}` |")

    if result.docs_without_metadata:
        lines += ["", "## Missing Metadata", ""]
        lines += [f"- {doc}" for doc in result.docs_without_metadata]

    if result.archivable_docs:
        lines += ["", "## Archivable Documents", ""]
        lines += [f"- {doc}" for doc in result.archivable_docs]

    lines.append("")
    return "\n".join(lines)

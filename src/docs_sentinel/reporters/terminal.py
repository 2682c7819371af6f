"""
Terminal reporter - rich rendering of audit and check results.

Both renderers draw onto a Console passed in by the caller, so tests can
record output with `Console(record=True)` instead of capturing stdout.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import AuditResult, CheckResult


def score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def staleness_style(days: Optional[int]) -> str:
    if days is None or days > 30:
        return "red"
    if days > 14:
        return "yellow"
    return "green"


def build_stale_table(result: AuditResult) -> Table:
    table = Table(title="Stale Documents", title_style="bold yellow", expand=False)
    table.add_column("Document", style="cyan")
    table.add_column("Last Verified")
    table.add_column("Days", justify="right", style="red")
    table.add_column("Changed References", style="dim")

    for doc in result.stale_docs:
        table.add_row(
            escape(doc.doc_path),
            doc.last_verified,
            str(doc.days_since_verified),
            escape(", ".join(doc.changed_references)) or "-",
        )
    return table


def build_orphaned_table(result: AuditResult) -> Table:
    table = Table(title="Orphaned References", title_style="bold red", expand=False)
    table.add_column("Document", style="cyan")
    table.add_column("Missing Reference", style="red")

    for ref in result.orphaned_refs:
        table.add_row(escape(ref.doc_path), escape(ref.missing_ref))
    return table


def render_audit(result: AuditResult, console: Console) -> None:
    style = score_style(result.health_score)
    console.print()
    console.print(f"[bold]Documentation Health Score: [{style}]{result.health_score}[/{style}]/100[/bold]")
    console.print()

    console.print("[bold]Summary[/bold]")
    console.print(f"  Total docs: {result.total_docs}")
    console.print(f"  With metadata: {result.docs_with_metadata}")
    console.print(f"  Without metadata: {len(result.docs_without_metadata)}")
    console.print(f"  Stale: {len(result.stale_docs)}")
    console.print(f"  Orphaned refs: {len(result.orphaned_refs)}")
    console.print(f"  Archivable: {len(result.archivable_docs)}")

    if result.stale_docs:
        console.print()
        console.print(build_stale_table(result))

    if result.orphaned_refs:
        console.print()
        console.print(build_orphaned_table(result))

    if result.docs_without_metadata:
        console.print()
        console.print("[bold dim]Missing Metadata[/bold dim]")
        for doc in result.docs_without_metadata:
            console.print(f"  [dim]{escape(doc)}[/dim]")

    if result.archivable_docs:
        console.print()
        console.print("[bold dim]Archivable Documents[/bold dim]")
        for doc in result.archivable_docs:
            console.print(f"  [dim]{escape(doc)}[/dim]")

    console.print()


def render_check(result: CheckResult, console: Console) -> None:
    """Print affected docs; prints nothing when no doc references the file."""
    if not result.affected_docs:
        return

    console.print(
        f"[yellow]docs-sentinel: {len(result.affected_docs)} doc(s) reference "
        f"{escape(result.source_file)}[/yellow]"
    )
    for doc in result.affected_docs:
        style = staleness_style(doc.days_since_verified)
        age = f"{doc.days_since_verified}d ago" if doc.days_since_verified is not None else "unknown"
        console.print(f"  [cyan]{escape(doc.doc_path)}[/cyan] (verified [{style}]{age}[/{style}])")

from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..auditor import audit_docs
from ..config import load_config
from ..models import AuditResult
from ..reporters import format_audit_json, format_audit_markdown, render_audit


def run_audit(
    project_root: Path,
    console: Console,
    output_format: str = "terminal",
    no_git: bool = False,
    today: Optional[date] = None,
) -> AuditResult:
    """Audit the project's docs and print the report in the requested format."""
    config = load_config(project_root)
    result = audit_docs(project_root, config, no_git=no_git, today=today)

    if output_format == "json":
        console.out(format_audit_json(result), highlight=False)
    elif output_format == "markdown":
        console.out(format_audit_markdown(result), highlight=False)
    else:
        render_audit(result, console)
    return result

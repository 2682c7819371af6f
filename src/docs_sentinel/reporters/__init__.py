"""Output formats for audit and check results."""

from .json_report import format_audit_json, format_check_json, load_audit_json
from .markdown import format_audit_markdown
from .terminal import render_audit, render_check, score_style, staleness_style

__all__ = [
    "format_audit_json",
    "format_check_json",
    "load_audit_json",
    "format_audit_markdown",
    "render_audit",
    "render_check",
    "score_style",
    "staleness_style",
]

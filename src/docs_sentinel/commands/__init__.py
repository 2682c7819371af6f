"""Command implementations behind the `docs-sentinel` CLI."""

from .audit import run_audit
from .check import is_inside_docs_dir, resolve_source_path, run_check
from .init import run_init

__all__ = ["run_audit", "run_check", "run_init", "is_inside_docs_dir", "resolve_source_path"]

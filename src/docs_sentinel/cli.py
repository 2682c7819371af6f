#!/usr/bin/env python3
"""
docs-sentinel - keep documentation fresh by tracking references between
docs and source code.

Usage:
    docs-sentinel init [--dry-run] [--no-tools] [--no-frontmatter] [--docs-dir PATH]
    docs-sentinel check --file PATH [--quiet] [--format terminal|json]
    docs-sentinel audit [--format terminal|json|markdown] [--no-git]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from . import __version__
from .commands import run_audit, run_check, run_init
from .config import find_project_root
from .constants import HEALTH_FAIL_THRESHOLD


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-sentinel",
        description="Keep documentation fresh by tracking references between docs and source code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s init --dry-run
    %(prog)s check --file src/auth/login.ts
    %(prog)s audit --format markdown > docs-health.md
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Project root (default: nearest directory with .git, pyproject.toml or package.json)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init", help="Scan docs, add metadata, and configure tool integrations"
    )
    init_parser.add_argument("--dry-run", action="store_true", help="Preview changes without modifying files")
    init_parser.add_argument("--no-tools", action="store_true", help="Skip tool integration setup")
    init_parser.add_argument("--no-frontmatter", action="store_true", help="Skip metadata generation")
    init_parser.add_argument("--docs-dir", default=None, help="Documentation directory (default: ./docs)")

    check_parser = subparsers.add_parser("check", help="Check which docs reference a given source file")
    check_parser.add_argument("--file", required=True, help="Source file to check")
    check_parser.add_argument("--quiet", action="store_true", help="Suppress errors; only output matches")
    check_parser.add_argument("--format", choices=("terminal", "json"), default="terminal")

    audit_parser = subparsers.add_parser("audit", help="Full documentation health audit")
    audit_parser.add_argument("--format", choices=("terminal", "json", "markdown"), default="terminal")
    audit_parser.add_argument(
        "--no-git", action="store_true", help="Skip git history, use filesystem timestamps"
    )

    return parser


def resolve_root(args: argparse.Namespace) -> Optional[Path]:
    if args.root is not None:
        root = args.root.resolve()
        return root if root.is_dir() else None
    return find_project_root(Path.cwd())


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    console = Console()
    err_console = Console(stderr=True)

    project_root = resolve_root(args)
    if project_root is None:
        if not (args.command == "check" and args.quiet):
            err_console.print(
                "[red]Error: Could not find project root (.git, pyproject.toml or package.json)[/red]"
            )
        return 1

    if args.command == "init":
        run_init(
            project_root,
            console,
            dry_run=args.dry_run,
            tools=not args.no_tools,
            frontmatter=not args.no_frontmatter,
            docs_dir=args.docs_dir,
        )
        return 0

    if args.command == "check":
        run_check(project_root, args.file, console, output_format=args.format)
        return 0

    result = run_audit(project_root, console, output_format=args.format, no_git=args.no_git)
    return 1 if result.health_score < HEALTH_FAIL_THRESHOLD else 0


if __name__ == "__main__":
    sys.exit(main())

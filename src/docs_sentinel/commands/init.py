"""
`docs-sentinel init` - bootstrap metadata for an existing docs tree.

Adds or refreshes the metadata block on every document, configures any
detected editor/agent tools, and writes a config file if there is none.
"""

import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from ..config import SentinelConfig, load_config, write_config
from ..constants import CONFIG_FILENAME
from ..frontmatter import generate_frontmatter, merge_frontmatter, render_document
from ..integrations import SETUP_FUNCTIONS, IntegrationError, detect_ecosystem, detect_tools
from ..models import Document, InitResult
from ..references import extract_references, validate_references
from ..scanner import scan_docs
from ..utils import atomic_write

logger = logging.getLogger(__name__)


def suggest_prefixes(project_root: Path, config: SentinelConfig, console: Console) -> SentinelConfig:
    """Swap in ecosystem-specific path prefixes unless the config sets its own."""
    if config.path_prefixes is not None:
        return config

    ecosystems = detect_ecosystem(project_root)
    if not ecosystems:
        return config

    prefixes: List[str] = []
    for _, suggested in ecosystems:
        prefixes.extend(p for p in suggested if p not in prefixes)

    languages = ", ".join(language for language, _ in ecosystems)
    console.print(f"[dim]Detected: {languages}; using path prefixes {', '.join(prefixes)}[/dim]")
    return replace(config, path_prefixes=tuple(prefixes))


def note_root_markdown(project_root: Path, config: SentinelConfig, console: Console) -> None:
    if not config.docs_prefix:
        return
    outside = sorted(p.name for p in project_root.glob("*.md") if p.is_file())
    if outside:
        console.print(
            f"[yellow]Note: {len(outside)} markdown file(s) found outside "
            f"{escape(config.docs_dir)}: {escape(', '.join(outside))}[/yellow]"
        )


def existing_refs(doc: Document, project_root: Path, config: SentinelConfig) -> List[str]:
    """References extracted from the body that point at files that exist."""
    refs = extract_references(doc.content, config.prefixes, config.extensions, doc.relative_path)
    existing, _ = validate_references(project_root, refs)
    return existing


def render_updated(
    doc: Document,
    project_root: Path,
    config: SentinelConfig,
    today: date,
) -> str:
    """New text for a document; equal to raw_content when nothing changes."""
    if doc.has_metadata:
        # Curated references win; extraction only fills an empty list
        refs = list(doc.metadata.references) or existing_refs(doc, project_root, config)
        return merge_frontmatter(doc.raw_content, refs, config.frontmatter_key, today)

    refs = existing_refs(doc, project_root, config)
    if doc.has_structured_block:
        return merge_frontmatter(doc.raw_content, refs, config.frontmatter_key, today)

    metadata = generate_frontmatter(doc.relative_path, doc.content, refs, today)
    return render_document(metadata, doc.content, config.frontmatter_key)


def configure_tools(project_root: Path, console: Console) -> List[str]:
    configured = []
    for tool in detect_tools(project_root):
        if not tool.detected:
            continue
        try:
            if SETUP_FUNCTIONS[tool.name](project_root):
                configured.append(tool.name)
        except (IntegrationError, OSError) as e:
            logger.warning(f"Could not configure {tool.name}: {e}")
            console.print(f"[yellow]Warning: Could not configure {tool.name}: {escape(str(e))}[/yellow]")
    return configured


def run_init(
    project_root: Path,
    console: Console,
    dry_run: bool = False,
    tools: bool = True,
    frontmatter: bool = True,
    docs_dir: Optional[str] = None,
    today: Optional[date] = None,
) -> InitResult:
    project_root = Path(project_root)
    today = today or date.today()

    config_path = project_root / CONFIG_FILENAME
    config_existed = config_path.exists()
    config = load_config(project_root)
    if docs_dir:
        config = config.with_docs_dir(docs_dir)

    docs_path = project_root / config.docs_prefix
    if not docs_path.is_dir():
        console.print(
            f"[red]Error: Documentation directory not found: {escape(config.docs_dir)}\n"
            f"Create it with: mkdir -p {escape(config.docs_dir)}[/red]"
        )
        return InitResult()

    config = suggest_prefixes(project_root, config, console)
    note_root_markdown(project_root, config, console)

    docs = scan_docs(project_root, config, today)
    added = 0
    skipped = 0

    if frontmatter:
        for doc in docs:
            updated = render_updated(doc, project_root, config, today)

            if doc.has_metadata:
                skipped += 1
            else:
                added += 1
                if dry_run:
                    console.print(f"[dim]  Would add metadata: {escape(doc.relative_path)}[/dim]")

            if dry_run or updated == doc.raw_content:
                continue
            atomic_write(Path(doc.file_path), updated)
            logger.debug(f"Updated {doc.relative_path}")

    configured: List[str] = []
    if tools and not dry_run:
        configured = configure_tools(project_root, console)

    config_created = False
    if not config_existed and not dry_run:
        write_config(project_root, config)
        config_created = True

    console.print()
    console.print("[bold]docs-sentinel init[/bold]")
    console.print(f"  Docs scanned: [cyan]{len(docs)}[/cyan]")
    console.print(f"  Metadata added: [green]{added}[/green]")
    console.print(f"  Metadata skipped: [dim]{skipped}[/dim]")
    if configured:
        console.print(f"  Tools configured: [green]{', '.join(configured)}[/green]")
    if config_created:
        console.print(f"  Config created: [green]{CONFIG_FILENAME}[/green]")
    if dry_run:
        console.print("[yellow]  (dry run, no files modified)[/yellow]")

    return InitResult(
        docs_scanned=len(docs),
        metadata_added=added,
        metadata_skipped=skipped,
        tools_configured=configured,
        config_created=config_created,
    )

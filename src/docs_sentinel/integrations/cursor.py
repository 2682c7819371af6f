from pathlib import Path

from ..utils import atomic_write
from .detector import detect_runner

RULE_FILENAME = "docs-sentinel.mdc"

CURSOR_RULE_TEMPLATE = """---
description: Documentation freshness enforcement
globs: ["docs/**/*.md", "docs/**/*.mdx"]
---

# docs-sentinel: Keep Documentation Fresh

When you edit a source file that is referenced in documentation under `./docs/`,
remind the user to verify the affected docs are still accurate.

Run `{runner} check --file <changed-file>` after editing source files
to see which docs reference them.

Before committing, run `{runner} audit` to check overall documentation health.
"""


def setup_cursor_rule(project_root: Path) -> bool:
    """Write the Cursor rule file. Returns False if one is already there."""
    project_root = Path(project_root)
    rule_path = project_root / ".cursor" / "rules" / RULE_FILENAME
    if rule_path.exists():
        return False

    atomic_write(rule_path, CURSOR_RULE_TEMPLATE.format(runner=detect_runner(project_root)))
    return True

"""
Shared constants for docs-sentinel.

Path prefixes and extensions drive reference extraction; the category
keywords drive metadata generation for new documents.
"""

import re
from typing import Dict, FrozenSet, Tuple

CONFIG_FILENAME = ".docs-sentinel.json"

DEFAULT_DOCS_DIR = "./docs"
DEFAULT_STALE_THRESHOLD_DAYS = 30
DEFAULT_ARCHIVE_THRESHOLD_DAYS = 90
DEFAULT_MAX_FILE_SIZE = 1_048_576  # 1 MiB

# Exit code 1 from `audit` below this score
HEALTH_FAIL_THRESHOLD = 50

# Timeout for a single git subprocess, in seconds
GIT_TIMEOUT = 10

DOC_GLOBS: Tuple[str, ...] = ("*.md", "*.mdx")

# =============================================================================
# Metadata vocabulary
# =============================================================================

STATUSES: Tuple[str, ...] = ("active", "completed", "deprecated")
ARCHIVABLE_STATUSES: FrozenSet[str] = frozenset({"completed", "deprecated"})

CATEGORIES: Tuple[str, ...] = (
    "ticket",
    "feature-plan",
    "architecture",
    "strategy",
    "skill",
    "general",
)

DEFAULT_STATUS = "active"
DEFAULT_CATEGORY = "general"

# Fields written and owned by docs-sentinel. Anything else in a
# front matter block belongs to another tool and is passed through.
OWNED_FIELDS: Tuple[str, ...] = ("status", "category", "feature", "references", "last_verified")

# =============================================================================
# Reference extraction
# =============================================================================

DEFAULT_PATH_PREFIXES: Tuple[str, ...] = (
    # JS/TS
    "apps/", "libs/", "src/", "packages/",
    # Go
    "cmd/", "internal/", "pkg/",
    # Rust
    "crates/",
    # Ruby
    "lib/", "spec/", "config/",
    # PHP
    "app/", "routes/",
    # General
    "bin/", "scripts/", "tools/", ".github/", "deploy/", "infra/",
)

SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({
    # JS/TS
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts",
    # Systems
    ".rs", ".go", ".c", ".cpp", ".h", ".hpp",
    # JVM
    ".java", ".kt", ".kts", ".scala", ".gradle",
    # Web
    ".vue", ".svelte", ".astro", ".css", ".scss",
    # Python/Ruby/PHP
    ".py", ".rb", ".php",
    # Mobile
    ".swift", ".dart",
    # Other
    ".ex", ".exs", ".hs", ".prisma", ".graphql", ".sql", ".proto",
    # Config
    ".json", ".yaml", ".yml", ".toml", ".xml", ".tf", ".tfvars",
    # Scripts
    ".sh", ".bash",
    # Docs
    ".md", ".mdx",
})

# Build/ops files that conventionally have no extension
NAMED_FILES: FrozenSet[str] = frozenset({
    "Dockerfile",
    "Makefile",
    "Justfile",
    "Procfile",
    "Gemfile",
})

# =============================================================================
# Metadata inference
# =============================================================================

# Checked in order against the filename; first hit wins
CATEGORY_KEYWORDS: Dict[str, str] = {
    "T-": "ticket",
    "ticket": "ticket",
    "PLAN": "feature-plan",
    "plan": "feature-plan",
    "ARCHITECTURE": "architecture",
    "architecture": "architecture",
    "ADR": "architecture",
    "GUIDELINES": "architecture",
    "guidelines": "architecture",
    "STRATEGY": "strategy",
    "strategy": "strategy",
    "SKILL": "skill",
    "skill": "skill",
    "README": "general",
    "CONTRIBUTING": "general",
    "CHANGELOG": "general",
}

FEATURE_DIR_PATTERN = re.compile(r"docs/feat[_-]([^/]+)")

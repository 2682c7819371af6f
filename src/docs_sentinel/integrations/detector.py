from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class DetectedTool:
    name: str
    detected: bool
    config_path: str


TOOL_MARKERS: Tuple[Tuple[str, str, str], ...] = (
    # (name, marker dir, config path)
    ("claude-code", ".claude", ".claude/settings.json"),
    ("cursor", ".cursor", ".cursor/rules"),
    ("vscode", ".vscode", ".vscode/tasks.json"),
)

ECOSYSTEM_MARKERS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("go.mod", "go", ("cmd/", "internal/", "pkg/")),
    ("Cargo.toml", "rust", ("crates/", "src/")),
    ("pyproject.toml", "python", ("src/", "lib/", "tests/")),
    ("Gemfile", "ruby", ("lib/", "spec/", "config/", "app/")),
    ("composer.json", "php", ("app/", "routes/", "src/")),
)

# Lock file -> command prefix that puts docs-sentinel on PATH
RUNNER_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("uv.lock", "uv run docs-sentinel"),
    ("poetry.lock", "poetry run docs-sentinel"),
)
DEFAULT_RUNNER = "docs-sentinel"


def detect_tools(project_root: Path) -> List[DetectedTool]:
    project_root = Path(project_root)
    return [
        DetectedTool(name=name, detected=(project_root / marker).is_dir(), config_path=config_path)
        for name, marker, config_path in TOOL_MARKERS
    ]


def detect_ecosystem(project_root: Path) -> List[Tuple[str, Tuple[str, ...]]]:
    """(language, suggested path prefixes) for every ecosystem marker present."""
    project_root = Path(project_root)
    return [
        (language, prefixes)
        for marker, language, prefixes in ECOSYSTEM_MARKERS
        if (project_root / marker).exists()
    ]


def detect_runner(project_root: Path) -> str:
    project_root = Path(project_root)
    for lock_file, runner in RUNNER_MARKERS:
        if (project_root / lock_file).exists():
            return runner
    return DEFAULT_RUNNER

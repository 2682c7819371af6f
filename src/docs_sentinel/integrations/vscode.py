from pathlib import Path

from ..utils import atomic_write
from .detector import detect_runner
from .jsonc import IntegrationError, dump_json, load_jsonc

TASK_LABEL = "docs-sentinel: audit"


def setup_vscode_task(project_root: Path) -> bool:
    """
    Add an audit task to .vscode/tasks.json.

    Returns False when the task is already defined.

    Raises:
        IntegrationError: tasks.json exists but cannot be parsed
    """
    project_root = Path(project_root)
    tasks_path = project_root / ".vscode" / "tasks.json"

    config = load_jsonc(tasks_path)
    config.setdefault("version", "2.0.0")
    tasks = config.setdefault("tasks", [])
    if not isinstance(tasks, list):
        raise IntegrationError(f"{tasks_path}: 'tasks' must be a list")

    if any(isinstance(t, dict) and t.get("label") == TASK_LABEL for t in tasks):
        return False

    tasks.append({
        "label": TASK_LABEL,
        "type": "shell",
        "command": f"{detect_runner(project_root)} audit",
        "group": "test",
        "presentation": {"reveal": "always", "panel": "new"},
        "problemMatcher": [],
    })
    atomic_write(tasks_path, dump_json(config))
    return True

"""Editor and agent tool integrations configured by `docs-sentinel init`."""

from .claude_code import setup_claude_code_hook
from .cursor import setup_cursor_rule
from .detector import DetectedTool, detect_ecosystem, detect_runner, detect_tools
from .jsonc import IntegrationError, load_jsonc, strip_jsonc_comments
from .vscode import setup_vscode_task

# Tool name -> setup function; each returns True when it changed something
SETUP_FUNCTIONS = {
    "claude-code": setup_claude_code_hook,
    "cursor": setup_cursor_rule,
    "vscode": setup_vscode_task,
}

__all__ = [
    "DetectedTool",
    "IntegrationError",
    "SETUP_FUNCTIONS",
    "detect_ecosystem",
    "detect_runner",
    "detect_tools",
    "load_jsonc",
    "setup_claude_code_hook",
    "setup_cursor_rule",
    "setup_vscode_task",
    "strip_jsonc_comments",
]

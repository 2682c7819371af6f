"""
Claude Code integration - a PostToolUse hook that runs `docs-sentinel check`
on every file the agent writes or edits and feeds affected docs back to it.
"""

import logging
import os
import stat
from pathlib import Path

from ..utils import atomic_write
from .detector import detect_runner
from .jsonc import IntegrationError, dump_json, load_jsonc

logger = logging.getLogger(__name__)

HOOK_FILENAME = "docs-sentinel-hook.py"
HOOK_MATCHER = "Write|Edit"
HOOK_COMMAND = f'python3 "$CLAUDE_PROJECT_DIR"/.claude/hooks/{HOOK_FILENAME}'
HOOK_TIMEOUT = 30

HOOK_SCRIPT_TEMPLATE = '''#!/usr/bin/env python3
"""docs-sentinel PostToolUse hook. Never blocks the tool call."""

import json
import subprocess
import sys

RUNNER = __RUNNER__


def main():
    try:
        payload = json.load(sys.stdin)
    except ValueError:
        return 0
    if not isinstance(payload, dict):
        return 0

    file_path = (payload.get("tool_input") or {}).get("file_path")
    if not file_path:
        return 0

    try:
        result = subprocess.run(
            RUNNER + ["check", "--file", file_path, "--quiet"],
            capture_output=True,
            text=True,
            timeout=15,
        )
    except (OSError, subprocess.TimeoutExpired):
        return 0

    output = result.stdout.strip()
    if output:
        print(json.dumps({
            "hookSpecificOutput": {
                "hookEventName": "PostToolUse",
                "additionalContext": output,
            }
        }))
    return 0


if __name__ == "__main__":
    sys.exit(main())
'''


def render_hook_script(runner: str) -> str:
    return HOOK_SCRIPT_TEMPLATE.replace("__RUNNER__", repr(runner.split()))


def _has_hook(post_tool_use: list) -> bool:
    for entry in post_tool_use:
        if not isinstance(entry, dict):
            continue
        for hook in entry.get("hooks") or []:
            if isinstance(hook, dict) and "docs-sentinel-hook" in str(hook.get("command", "")):
                return True
    return False


def setup_claude_code_hook(project_root: Path) -> bool:
    """
    Install the hook script and register it in .claude/settings.json.

    The script is rewritten every time so it tracks the current runner;
    the settings entry is only added once. Returns True.

    Raises:
        IntegrationError: settings.json exists but cannot be parsed
    """
    project_root = Path(project_root)
    claude_dir = project_root / ".claude"

    # Parse settings first so a broken file leaves everything untouched
    settings_path = claude_dir / "settings.json"
    settings = load_jsonc(settings_path)

    hooks = settings.get("hooks")
    if hooks is None:
        hooks = {}
    if not isinstance(hooks, dict):
        raise IntegrationError(f"{settings_path}: 'hooks' must be an object")
    post_tool_use = hooks.get("PostToolUse")
    if post_tool_use is None:
        post_tool_use = []
    if not isinstance(post_tool_use, list):
        raise IntegrationError(f"{settings_path}: 'hooks.PostToolUse' must be a list")

    hook_path = claude_dir / "hooks" / HOOK_FILENAME
    atomic_write(hook_path, render_hook_script(detect_runner(project_root)))
    os.chmod(hook_path, os.stat(hook_path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    if _has_hook(post_tool_use):
        logger.debug(f"Hook already registered in {settings_path}")
        return True

    post_tool_use.append({
        "matcher": HOOK_MATCHER,
        "hooks": [
            {"type": "command", "command": HOOK_COMMAND, "timeout": HOOK_TIMEOUT},
        ],
    })
    hooks["PostToolUse"] = post_tool_use
    settings["hooks"] = hooks
    atomic_write(settings_path, dump_json(settings))
    logger.info(f"Registered docs-sentinel hook in {settings_path}")
    return True

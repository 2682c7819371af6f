"""
Minimal JSONC support for editor config files.

settings.json and tasks.json are commonly written with comments; a file
that still fails to parse after stripping them is never overwritten.
"""

import json
from pathlib import Path
from typing import Any, Dict


class IntegrationError(Exception):
    """Raised when a tool config file cannot be read or updated safely."""
    pass


def strip_jsonc_comments(text: str) -> str:
    """Remove // and /* */ comments outside of string literals."""
    out = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            start = i
            i += 1
            while i < n and text[i] != '"':
                i += 2 if text[i] == "\\" else 1
            i += 1
            out.append(text[start:i])
        elif text.startswith("//", i):
            while i < n and text[i] != "\n":
                i += 1
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def load_jsonc(path: Path) -> Dict[str, Any]:
    """Load a JSONC object file. A missing or blank file is an empty object."""
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IntegrationError(f"Could not read {path}: {e}") from e

    stripped = strip_jsonc_comments(text)
    if not stripped.strip():
        return {}
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise IntegrationError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise IntegrationError(f"{path} must contain a JSON object")
    return data


def dump_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2) + "\n"

"""Pytest fixtures and configuration for docs-sentinel tests."""

import os
import shutil
import subprocess
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Callable, Dict

import pytest

TODAY = date(2025, 6, 15)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def write_files(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def set_mtime(path: Path, when: date) -> None:
    """Pin a file's mtime to noon UTC on the given day."""
    stamp = datetime.combine(when, time(12, 0), tzinfo=timezone.utc).timestamp()
    os.utime(path, (stamp, stamp))


def git(root: Path, *args: str, env: Dict[str, str] = None) -> str:
    full_env = dict(os.environ)
    full_env.update({
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
        "GIT_CONFIG_NOSYSTEM": "1",
        "HOME": str(root),
    })
    if env:
        full_env.update(env)
    result = subprocess.run(
        ["git", *args], cwd=root, env=full_env, capture_output=True, text=True, check=True
    )
    return result.stdout


def commit_all(root: Path, message: str, when: str) -> None:
    """Commit everything with both dates pinned (ISO 8601, e.g. 2025-01-10T12:00:00+00:00)."""
    git(root, "add", "-A")
    git(
        root, "commit", "-q", "-m", message,
        env={"GIT_AUTHOR_DATE": when, "GIT_COMMITTER_DATE": when},
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def project(tmp_path) -> Path:
    """An empty project root marked by a pyproject.toml."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "pyproject.toml").write_text("[project]\nname = 'demo'\n")
    return root


@pytest.fixture
def make_files(project: Path) -> Callable[[Dict[str, str]], Path]:
    """Write a {relative path: content} mapping under the project root."""
    def _make(files: Dict[str, str]) -> Path:
        return write_files(project, files)
    return _make


@pytest.fixture
def documented_project(make_files) -> Path:
    """A small project with one healthy doc, one stale doc and one bare doc."""
    return make_files({
        "src/auth/login.ts": "export const login = () => {};\n",
        "src/db/schema.sql": "create table users (id int);\n",
        "docs/auth.md": (
            "---\n"
            "status: active\n"
            "category: architecture\n"
            "references:\n"
            "  - src/auth/login.ts\n"
            "last_verified: '2025-06-10'\n"
            "---\n"
            "# Auth\n\nLogin lives in `src/auth/login.ts`.\n"
        ),
        "docs/db.md": (
            "---\n"
            "status: completed\n"
            "category: general\n"
            "references:\n"
            "  - src/db/schema.sql\n"
            "  - src/db/removed.sql\n"
            "last_verified: '2025-01-01'\n"
            "---\n"
            "# Database\n"
        ),
        "docs/notes.md": "# Notes\n\nSee src/db/schema.sql for the tables.\n",
    })


@pytest.fixture
def git_project(project: Path) -> Path:
    """A git repository at the project root with no commits yet."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    git(project, "init", "-q")
    return project

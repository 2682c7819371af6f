"""Tests for the history date resolver."""

import subprocess
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from docs_sentinel.history import HistoryError, HistoryMode, HistoryResolver

from conftest import commit_all, git, requires_git, set_mtime


class TestWithoutGit:
    """Resolver behaviour when git history is unavailable or disabled."""

    def test_disabled(self, project):
        assert HistoryResolver(project, use_git=False).mode is HistoryMode.NONE

    def test_not_a_repository(self, project):
        with patch("docs_sentinel.history.subprocess.run", side_effect=FileNotFoundError):
            assert HistoryResolver(project).mode is HistoryMode.NONE

    def test_mtime_used(self, make_files, project):
        make_files({"src/a.ts": ""})
        set_mtime(project / "src/a.ts", date(2025, 3, 1))
        resolver = HistoryResolver(project, use_git=False)
        assert resolver.last_changed("src/a.ts") == datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_missing_file(self, project):
        assert HistoryResolver(project, use_git=False).last_changed("src/nope.ts") is None

    def test_resolve_all_skips_missing(self, make_files, project):
        make_files({"src/a.ts": ""})
        dates = HistoryResolver(project, use_git=False).resolve_all(["src/a.ts", "src/nope.ts"])
        assert list(dates) == ["src/a.ts"]


class TestRunGit:
    """Errors from the git subprocess surface as HistoryError."""

    def test_timeout(self, project):
        resolver = HistoryResolver(project, use_git=False)
        with patch(
            "docs_sentinel.history.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git", timeout=10),
        ):
            with pytest.raises(HistoryError, match="timed out"):
                resolver._run_git(["log"])

    def test_failure(self, project):
        resolver = HistoryResolver(project, use_git=False)
        error = subprocess.CalledProcessError(128, ["git"], stderr="fatal: bad\n")
        with patch("docs_sentinel.history.subprocess.run", side_effect=error):
            with pytest.raises(HistoryError, match="fatal: bad"):
                resolver._run_git(["log"])

    def test_git_failure_falls_back_to_mtime(self, make_files, project):
        make_files({"src/a.ts": ""})
        set_mtime(project / "src/a.ts", date(2025, 3, 1))
        resolver = HistoryResolver(project, use_git=False)
        resolver.mode = HistoryMode.NORMAL
        with patch.object(resolver, "git_date", side_effect=HistoryError("boom")):
            changed = resolver.last_changed("src/a.ts")
        assert changed.date() == date(2025, 3, 1)


@requires_git
class TestGitHistory:
    """Resolver against real repositories."""

    def test_normal_mode(self, git_project):
        (git_project / "a.txt").write_text("a")
        commit_all(git_project, "init", "2025-01-10T12:00:00+00:00")
        assert HistoryResolver(git_project).mode is HistoryMode.NORMAL

    def test_per_path_dates(self, git_project):
        """Each path gets its own last commit, not the newest of the set."""
        (git_project / "src").mkdir()
        (git_project / "src/old.ts").write_text("old")
        commit_all(git_project, "old", "2025-01-10T12:00:00+00:00")
        (git_project / "src/new.ts").write_text("new")
        commit_all(git_project, "new", "2025-05-20T12:00:00+00:00")

        dates = HistoryResolver(git_project).resolve_all(["src/old.ts", "src/new.ts"])
        assert dates["src/old.ts"].date() == date(2025, 1, 10)
        assert dates["src/new.ts"].date() == date(2025, 5, 20)

    def test_untracked_file_uses_mtime(self, git_project):
        (git_project / "a.txt").write_text("a")
        commit_all(git_project, "init", "2025-01-10T12:00:00+00:00")
        (git_project / "untracked.ts").write_text("x")
        set_mtime(git_project / "untracked.ts", date(2025, 4, 4))
        changed = HistoryResolver(git_project).last_changed("untracked.ts")
        assert changed.date() == date(2025, 4, 4)

    def test_shallow_clone_uses_mtime(self, git_project, tmp_path):
        (git_project / "a.ts").write_text("1")
        commit_all(git_project, "one", "2025-01-10T12:00:00+00:00")
        (git_project / "a.ts").write_text("2")
        commit_all(git_project, "two", "2025-02-10T12:00:00+00:00")

        clone = tmp_path / "clone"
        git(tmp_path, "clone", "-q", "--depth", "1", f"file://{git_project}", str(clone))
        set_mtime(clone / "a.ts", date(2025, 6, 1))

        resolver = HistoryResolver(clone)
        assert resolver.mode is HistoryMode.SHALLOW
        assert resolver.last_changed("a.ts").date() == date(2025, 6, 1)

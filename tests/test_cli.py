"""Tests for the command-line entry point."""

import json

import pytest

from docs_sentinel import __version__
from docs_sentinel.cli import build_parser, main


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["audit"])
        assert args.format == "terminal"
        assert not args.no_git
        assert not args.verbose

    def test_check_requires_file(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["check"])

    def test_rejects_unknown_format(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["check", "--file", "a.ts", "--format", "markdown"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Test main() exit codes and output streams."""

    def test_audit_healthy_exits_zero(self, documented_project, capsys):
        code = main(["--root", str(documented_project), "audit", "--no-git", "--format", "json"])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["total_docs"] == 3

    def test_audit_unhealthy_exits_one(self, make_files, project, capsys):
        make_files({f"docs/doc{i}.md": "# Bare\n" for i in range(30)})
        code = main(["--root", str(project), "audit", "--no-git"])
        assert code == 1

    def test_check_quiet_without_root(self, tmp_path, capsys):
        code = main(["--root", str(tmp_path / "missing"), "check", "--file", "a.ts", "--quiet"])
        assert code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_missing_root_reports_error(self, tmp_path, capsys):
        code = main(["--root", str(tmp_path / "missing"), "audit"])
        assert code == 1
        assert "Could not find project root" in capsys.readouterr().err

    def test_discovers_root_from_cwd(self, documented_project, monkeypatch, capsys):
        monkeypatch.chdir(documented_project / "docs")
        code = main(["check", "--file", "src/auth/login.ts", "--format", "json"])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["affected_docs"][0]["doc_path"] == "docs/auth.md"

    def test_init(self, make_files, project, capsys):
        make_files({"docs/a.md": "# A\n"})
        code = main(["--root", str(project), "init", "--no-tools"])
        assert code == 0
        assert (project / "docs/a.md").read_text().startswith("---\n")
        assert "docs-sentinel init" in capsys.readouterr().out

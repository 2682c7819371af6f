"""Tests for editor and agent tool integrations."""

import json
import os

import pytest

from docs_sentinel.integrations import (
    IntegrationError,
    detect_ecosystem,
    detect_runner,
    detect_tools,
    load_jsonc,
    setup_claude_code_hook,
    setup_cursor_rule,
    setup_vscode_task,
    strip_jsonc_comments,
)
from docs_sentinel.integrations.claude_code import HOOK_FILENAME, render_hook_script


class TestStripJsoncComments:
    """Test strip_jsonc_comments()."""

    def test_line_comment(self):
        assert json.loads(strip_jsonc_comments('{\n  // note\n  "a": 1\n}')) == {"a": 1}

    def test_block_comment(self):
        assert json.loads(strip_jsonc_comments('{"a": /* inline */ 1}')) == {"a": 1}

    def test_comment_markers_inside_strings_kept(self):
        text = '{"url": "https://example.com", "glob": "src/*/x"}'
        assert strip_jsonc_comments(text) == text

    def test_escaped_quote_in_string(self):
        text = '{"a": "say \\"hi\\" // not a comment"}'
        assert json.loads(strip_jsonc_comments(text)) == {"a": 'say "hi" // not a comment'}

    def test_unterminated_block_comment(self):
        assert strip_jsonc_comments('{"a": 1} /* dangling') == '{"a": 1} '


class TestDetector:
    def test_detect_tools(self, project):
        (project / ".claude").mkdir()
        (project / ".vscode").mkdir()
        detected = {tool.name: tool.detected for tool in detect_tools(project)}
        assert detected == {"claude-code": True, "cursor": False, "vscode": True}

    def test_detect_ecosystem(self, project):
        (project / "go.mod").write_text("module x\n")
        languages = [language for language, _ in detect_ecosystem(project)]
        assert languages == ["go", "python"]

    @pytest.mark.parametrize("lock_file,runner", [
        ("uv.lock", "uv run docs-sentinel"),
        ("poetry.lock", "poetry run docs-sentinel"),
        (None, "docs-sentinel"),
    ])
    def test_detect_runner(self, project, lock_file, runner):
        if lock_file:
            (project / lock_file).write_text("")
        assert detect_runner(project) == runner


class TestClaudeCodeHook:
    """Test setup_claude_code_hook()."""

    def test_creates_script_and_settings(self, project):
        assert setup_claude_code_hook(project)

        script = project / ".claude" / "hooks" / HOOK_FILENAME
        assert script.exists()
        assert os.access(script, os.X_OK)
        assert "RUNNER = ['docs-sentinel']" in script.read_text()

        settings = json.loads((project / ".claude" / "settings.json").read_text())
        entries = settings["hooks"]["PostToolUse"]
        assert len(entries) == 1
        assert entries[0]["matcher"] == "Write|Edit"
        assert HOOK_FILENAME in entries[0]["hooks"][0]["command"]

    def test_registered_once(self, project):
        setup_claude_code_hook(project)
        setup_claude_code_hook(project)
        settings = json.loads((project / ".claude" / "settings.json").read_text())
        assert len(settings["hooks"]["PostToolUse"]) == 1

    def test_preserves_existing_settings(self, project):
        claude_dir = project / ".claude"
        claude_dir.mkdir()
        (claude_dir / "settings.json").write_text(
            '{\n  // user settings\n  "model": "x",\n'
            '  "hooks": {"PreToolUse": [{"matcher": "Bash", "hooks": []}]}\n}\n'
        )
        setup_claude_code_hook(project)
        settings = json.loads((claude_dir / "settings.json").read_text())
        assert settings["model"] == "x"
        assert "PreToolUse" in settings["hooks"]
        assert "PostToolUse" in settings["hooks"]

    def test_broken_settings_left_alone(self, project):
        claude_dir = project / ".claude"
        claude_dir.mkdir()
        (claude_dir / "settings.json").write_text("{broken")
        with pytest.raises(IntegrationError):
            setup_claude_code_hook(project)
        assert (claude_dir / "settings.json").read_text() == "{broken"
        assert not (claude_dir / "hooks" / HOOK_FILENAME).exists()

    def test_script_uses_runner(self, project):
        (project / "uv.lock").write_text("")
        setup_claude_code_hook(project)
        script = (project / ".claude" / "hooks" / HOOK_FILENAME).read_text()
        assert "RUNNER = ['uv', 'run', 'docs-sentinel']" in script

    def test_rendered_script_is_valid_python(self):
        compile(render_hook_script("poetry run docs-sentinel"), HOOK_FILENAME, "exec")


class TestCursorRule:
    def test_creates_rule(self, project):
        assert setup_cursor_rule(project)
        rule = (project / ".cursor" / "rules" / "docs-sentinel.mdc").read_text()
        assert "docs-sentinel check --file" in rule

    def test_existing_rule_kept(self, project):
        rule = project / ".cursor" / "rules" / "docs-sentinel.mdc"
        rule.parent.mkdir(parents=True)
        rule.write_text("custom")
        assert not setup_cursor_rule(project)
        assert rule.read_text() == "custom"


class TestVSCodeTask:
    def test_creates_tasks_file(self, project):
        assert setup_vscode_task(project)
        tasks = json.loads((project / ".vscode" / "tasks.json").read_text())
        assert tasks["version"] == "2.0.0"
        assert tasks["tasks"][0]["label"] == "docs-sentinel: audit"
        assert tasks["tasks"][0]["command"] == "docs-sentinel audit"

    def test_added_once(self, project):
        assert setup_vscode_task(project)
        assert not setup_vscode_task(project)

    def test_keeps_existing_tasks(self, project):
        tasks_path = project / ".vscode" / "tasks.json"
        tasks_path.parent.mkdir()
        tasks_path.write_text('{"version": "2.0.0", /* c */ "tasks": [{"label": "build"}]}')
        setup_vscode_task(project)
        labels = [t["label"] for t in json.loads(tasks_path.read_text())["tasks"]]
        assert labels == ["build", "docs-sentinel: audit"]


class TestLoadJsonc:
    def test_missing_file(self, project):
        assert load_jsonc(project / "nope.json") == {}

    def test_non_object(self, project):
        path = project / "list.json"
        path.write_text("[]")
        with pytest.raises(IntegrationError):
            load_jsonc(path)

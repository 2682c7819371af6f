"""Tests for configuration loading and project root discovery."""

import json
import logging

import pytest

from docs_sentinel.config import (
    DEFAULT_CONFIG,
    ConfigError,
    SentinelConfig,
    find_project_root,
    load_config,
    read_config_file,
    resolve_config,
    write_config,
)
from docs_sentinel.constants import CONFIG_FILENAME, DEFAULT_PATH_PREFIXES, SOURCE_EXTENSIONS


class TestResolveConfig:
    """Test resolve_config() over the defaults."""

    def test_empty_partial_is_defaults(self):
        assert resolve_config({}) == DEFAULT_CONFIG
        assert resolve_config(None) == DEFAULT_CONFIG

    def test_overrides(self):
        config = resolve_config({
            "docsDir": "./documentation",
            "staleThresholdDays": 7,
            "ignore": ["archive/**"],
            "pathPrefixes": ["app/"],
        })
        assert config.docs_dir == "./documentation"
        assert config.stale_threshold_days == 7
        assert config.ignore == ("archive/**",)
        assert config.prefixes == ("app/",)
        # Untouched fields keep their defaults
        assert config.archive_threshold_days == DEFAULT_CONFIG.archive_threshold_days

    def test_unknown_keys_ignored(self):
        assert resolve_config({"somethingElse": 1}) == DEFAULT_CONFIG

    def test_wrong_type_keeps_default(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = resolve_config({"staleThresholdDays": "thirty"})
        assert config.stale_threshold_days == DEFAULT_CONFIG.stale_threshold_days
        assert "staleThresholdDays" in caplog.text

    def test_bool_is_not_int(self):
        assert resolve_config({"maxFileSize": True}).max_file_size == DEFAULT_CONFIG.max_file_size

    def test_default_prefixes_and_extensions(self):
        assert DEFAULT_CONFIG.prefixes == DEFAULT_PATH_PREFIXES
        assert DEFAULT_CONFIG.extensions == SOURCE_EXTENSIONS

    def test_config_is_immutable(self):
        with pytest.raises(Exception):
            DEFAULT_CONFIG.docs_dir = "elsewhere"


class TestDocsPrefix:
    @pytest.mark.parametrize("docs_dir,expected", [
        ("./docs", "docs"),
        ("docs/", "docs"),
        ("./docs/guides", "docs/guides"),
        (".", ""),
        ("./", ""),
    ])
    def test_docs_prefix(self, docs_dir, expected):
        assert SentinelConfig(docs_dir=docs_dir).docs_prefix == expected


class TestLoadConfig:
    """Test load_config() and the file round trip."""

    def test_missing_file(self, project):
        assert load_config(project) == DEFAULT_CONFIG

    def test_reads_file(self, project):
        (project / CONFIG_FILENAME).write_text(json.dumps({"archiveThresholdDays": 10}))
        assert load_config(project).archive_threshold_days == 10

    def test_invalid_json_falls_back(self, project, caplog):
        (project / CONFIG_FILENAME).write_text("{not json")
        with caplog.at_level(logging.WARNING):
            assert load_config(project) == DEFAULT_CONFIG
        assert "using defaults" in caplog.text

    def test_non_object_raises_in_reader(self, project):
        path = project / CONFIG_FILENAME
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            read_config_file(path)

    def test_write_then_load(self, project):
        config = resolve_config({"docsDir": "./handbook", "frontmatterKey": "sentinel"})
        path = write_config(project, config)
        data = json.loads(path.read_text())
        assert data["docsDir"] == "./handbook"
        assert "pathPrefixes" not in data
        assert load_config(project) == config


class TestFindProjectRoot:
    def test_finds_marker_above(self, project):
        nested = project / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == project.resolve()

    def test_git_marker(self, tmp_path):
        (tmp_path / "repo" / ".git").mkdir(parents=True)
        assert find_project_root(tmp_path / "repo") == (tmp_path / "repo").resolve()

"""Tests for runner configuration loading."""

from pathlib import Path

import pytest

from scenario_core.config import (
    DEFAULT_PATTERN,
    DEFAULT_REPORT_PATH,
    RunnerConfig,
    find_config_file,
    load_config,
)


class TestRunnerConfig:
    """Tests for RunnerConfig."""

    def test_defaults(self):
        """A bare config runs nothing and writes no report."""
        config = RunnerConfig()
        assert config.paths == []
        assert config.pattern == DEFAULT_PATTERN
        assert config.method_order is None
        assert config.fail_fast is False
        assert config.write_report is False
        assert config.report_path == DEFAULT_REPORT_PATH

    def test_from_dict(self):
        """Dictionary values override defaults."""
        config = RunnerConfig.from_dict({
            "paths": "specs",
            "method_order": "LEGACY",
            "fail_fast": True,
            "report_path": "out/report.json",
        })
        assert config.paths == ["specs"]
        assert config.method_order == "legacy"
        assert config.fail_fast is True
        assert config.report_path == "out/report.json"

    def test_invalid_method_order(self):
        """Unknown orderings are rejected."""
        with pytest.raises(ValueError, match="Invalid method_order"):
            RunnerConfig.from_dict({"method_order": "alphabetical"})

    def test_invalid_paths(self):
        """paths must be a string or a list."""
        with pytest.raises(ValueError, match="'paths' must be"):
            RunnerConfig.from_dict({"paths": 42})

    def test_to_dict(self):
        """to_dict reflects every setting."""
        data = RunnerConfig(paths=["a"], verbose=True).to_dict()
        assert data["paths"] == ["a"]
        assert data["verbose"] is True
        assert set(data) == {
            "paths", "pattern", "method_order", "fail_fast",
            "verbose", "write_report", "report_path",
        }


class TestYamlLoading:
    """Tests for YAML configuration files."""

    def test_from_yaml(self, tmp_path):
        """Relative paths resolve against the config file's directory."""
        config_file = tmp_path / "scenario.yaml"
        config_file.write_text(
            "paths:\n"
            "  - specs\n"
            "pattern: 'check_*.py'\n"
            "write_report: true\n"
        )

        config = RunnerConfig.from_yaml(config_file)

        assert config.paths == [str(tmp_path / "specs")]
        assert config.pattern == "check_*.py"
        assert config.write_report is True

    def test_missing_file(self, tmp_path):
        """A missing file is reported."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            RunnerConfig.from_yaml(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        """An empty file is invalid."""
        config_file = tmp_path / "scenario.yaml"
        config_file.write_text("")
        with pytest.raises(ValueError, match="Empty or invalid YAML"):
            RunnerConfig.from_yaml(config_file)

    def test_non_mapping(self, tmp_path):
        """The top level must be a mapping."""
        config_file = tmp_path / "scenario.yaml"
        config_file.write_text("- specs\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            RunnerConfig.from_yaml(config_file)

    def test_find_config_file(self, tmp_path):
        """Hidden config files are found too."""
        assert find_config_file(tmp_path) is None
        (tmp_path / ".scenario.yml").write_text("paths: specs\n")
        assert find_config_file(tmp_path) == tmp_path / ".scenario.yml"

    def test_load_config_dispatch(self, tmp_path):
        """load_config accepts a dictionary or a path."""
        assert load_config({"fail_fast": True}).fail_fast is True

        config_file = tmp_path / "scenario.yaml"
        config_file.write_text("verbose: true\n")
        assert load_config(str(config_file)).verbose is True
        assert load_config(Path(config_file)).verbose is True

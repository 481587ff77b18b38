"""
Configuration handling for the scenario runner.

Runner settings are read from a YAML file or a dictionary. Per-scenario
settings (separator, method order, transcript sink) are class attributes on
the scenario itself; a runner-level ``method_order`` only applies to
scenarios that do not declare their own.

Example YAML configuration:
    paths:
      - specs
    pattern: "*_spec.py"
    method_order: declaration
    fail_fast: false
    verbose: false
    write_report: true
    report_path: reports/scenarios.json

Example usage:
    from scenario_core.config import load_config

    config = load_config("scenario.yaml")
    config = load_config({"paths": ["specs"], "fail_fast": True})
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .classifier import METHOD_ORDERS

DEFAULT_PATTERN = "*_spec.py"
DEFAULT_REPORT_PATH = "scenario_report.json"

CONFIG_CANDIDATES = (
    "scenario.yaml",
    "scenario.yml",
    ".scenario.yaml",
    ".scenario.yml",
)


def _parse_method_order(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).lower()
    if value not in METHOD_ORDERS:
        raise ValueError(
            f"Invalid method_order: {value}. Must be one of {', '.join(METHOD_ORDERS)}."
        )
    return value


def _parse_paths(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"'paths' must be a string or a list, got {type(value).__name__}")
    return [str(p) for p in value]


class RunnerConfig:
    """
    Configuration container for a scenario run.

    Attributes:
        paths: Files or directories to search for scenarios
        pattern: File glob used inside directories
        method_order: Ordering applied to scenarios without their own, or None
        fail_fast: Stop after the first failing scenario
        verbose: Enable verbose output
        write_report: Write a JSON report after the run
        report_path: Path for the JSON report
    """

    def __init__(
        self,
        paths: Optional[List[str]] = None,
        pattern: str = DEFAULT_PATTERN,
        method_order: Optional[str] = None,
        fail_fast: bool = False,
        verbose: bool = False,
        write_report: bool = False,
        report_path: Optional[str] = None,
    ):
        self.paths = paths or []
        self.pattern = pattern
        self.method_order = _parse_method_order(method_order)
        self.fail_fast = fail_fast
        self.verbose = verbose
        self.write_report = write_report
        self.report_path = report_path or DEFAULT_REPORT_PATH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunnerConfig":
        """
        Create configuration from a dictionary.

        Raises:
            ValueError: If a value has the wrong shape
        """
        return cls(
            paths=_parse_paths(data.get("paths")),
            pattern=data.get("pattern", DEFAULT_PATTERN),
            method_order=data.get("method_order"),
            fail_fast=bool(data.get("fail_fast", False)),
            verbose=bool(data.get("verbose", False)),
            write_report=bool(data.get("write_report", False)),
            report_path=data.get("report_path"),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RunnerConfig":
        """
        Load configuration from a YAML file.

        Relative ``paths`` are resolved against the file's directory.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the YAML is empty or invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            raise ValueError(f"Empty or invalid YAML file: {path}")
        if not isinstance(data, dict):
            raise ValueError(f"YAML file must contain a mapping: {path}")

        config = cls.from_dict(data)
        config.paths = [str((path.parent / p)) if not Path(p).is_absolute() else p for p in config.paths]
        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paths": list(self.paths),
            "pattern": self.pattern,
            "method_order": self.method_order,
            "fail_fast": self.fail_fast,
            "verbose": self.verbose,
            "write_report": self.write_report,
            "report_path": self.report_path,
        }


def find_config_file(directory: Optional[Path] = None) -> Optional[Path]:
    """Find a runner configuration file in common locations."""
    base = directory or Path(".")
    for name in CONFIG_CANDIDATES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_config(source: Union[str, Path, Dict[str, Any]]) -> RunnerConfig:
    """
    Load configuration from a YAML path or a dictionary.

    Args:
        source: Configuration source

    Returns:
        RunnerConfig instance
    """
    if isinstance(source, dict):
        return RunnerConfig.from_dict(source)
    return RunnerConfig.from_yaml(source)

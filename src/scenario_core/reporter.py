"""
Report generation for scenario runs.

Takes the summary dictionary returned by ``ScenarioRunner.run()`` and
renders it as JSON (for CI) or as a human-readable console summary. The
per-scenario transcripts are written by the scenarios themselves; these
reporters only summarize.

Example usage:
    from scenario_core.reporter import ConsoleReporter, ReportGenerator

    result = runner.run()

    generator = ReportGenerator(result)
    generator.write_json("reports/scenarios.json")

    reporter = ConsoleReporter(result, verbose=True)
    reporter.print_summary()
"""

import json
import os
import platform
import socket
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


@dataclass
class ReportMetadata:
    """
    Metadata about the environment a run executed in.

    Attributes:
        run_id: Unique identifier for this run
        timestamp: ISO 8601 timestamp
        hostname: Machine hostname
        platform: Operating system platform
        python_version: Interpreter version
        user: Username from environment
    """
    run_id: str
    timestamp: str
    hostname: str
    platform: str
    python_version: str
    user: str


class ReportGenerator:
    """Serializes a run summary to JSON."""

    def __init__(self, result: Dict[str, Any], run_id: Optional[str] = None):
        """
        Initialize the report generator.

        Args:
            result: Summary dictionary from ScenarioRunner.run()
            run_id: Optional run identifier (generated if not provided)
        """
        self.result = result
        self.run_id = run_id or f"scenarios-{int(datetime.now().timestamp())}"

    def build_metadata(self) -> ReportMetadata:
        return ReportMetadata(
            run_id=self.run_id,
            timestamp=datetime.now(timezone.utc).isoformat(),
            hostname=socket.gethostname(),
            platform=sys.platform,
            python_version=platform.python_version(),
            user=os.environ.get("USER", os.environ.get("USERNAME", "unknown")),
        )

    def to_dict(self, include_transcripts: bool = True) -> Dict[str, Any]:
        results = self.result.get("results", [])
        if not include_transcripts:
            results = [{k: v for k, v in r.items() if k != "transcript"} for r in results]

        summary = {k: v for k, v in self.result.items() if k != "results"}
        return {
            "version": "1.0",
            "metadata": asdict(self.build_metadata()),
            "summary": summary,
            "results": results,
        }

    def to_json(self, indent: int = 2, include_transcripts: bool = True) -> str:
        return json.dumps(self.to_dict(include_transcripts), indent=indent, default=str)

    def write_json(self, path: str, indent: int = 2) -> Path:
        """
        Write the JSON report to a file, creating parent directories.

        Returns:
            Path to written file
        """
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            f.write(self.to_json(indent=indent))

        return output_path


class ConsoleReporter:
    """
    Reports a run summary to the console.

    Provides one status line per scenario, totals, and the failing
    conditions and errors.
    """

    def __init__(
        self,
        result: Dict[str, Any],
        verbose: bool = False,
        output: Optional[TextIO] = None,
    ):
        self.result = result
        self.verbose = verbose
        self.output = output or sys.stdout

    def _print(self, *args, **kwargs):
        print(*args, file=self.output, **kwargs)

    def print_scenario_result(self, scenario_result: Dict[str, Any]):
        name = scenario_result.get("scenario", "unknown")
        status = scenario_result.get("status", "UNKNOWN")
        duration = scenario_result.get("duration_ms", 0)
        self._print(f"  [{status:5s}] {name:40s} ({duration}ms)")

        if self.verbose:
            for example in scenario_result.get("examples", []):
                for condition in example.get("conditions", []):
                    if condition.get("status") == "failed":
                        self._print(f"          {condition['name']}: {condition.get('error', '')[:200]}")

    def print_summary(self):
        self._print()
        self._print("=" * 70)
        self._print("SCENARIO SUMMARY")
        self._print("=" * 70)

        for scenario_result in self.result.get("results", []):
            self.print_scenario_result(scenario_result)

        total = self.result.get("scenarios", 0)
        self._print()
        self._print(f"Scenarios: {self.result.get('scenarios_passed', 0)}/{total} passed, "
                    f"{self.result.get('scenarios_failed', 0)} failed, "
                    f"{self.result.get('scenarios_skipped', 0)} skipped")
        self._print(f"Conditions: {self.result.get('passed', 0)} passed, "
                    f"{self.result.get('failed', 0)} failed, "
                    f"{self.result.get('pending', 0)} pending, "
                    f"{self.result.get('skipped', 0)} skipped")

        total_ms = self.result.get("total_duration_ms", 0)
        self._print(f"\nTotal time: {total_ms / 1000:.2f}s")
        self._print(f"\nStatus: {self.result.get('status', 'UNKNOWN')}")

    def print_errors(self):
        errors = self.result.get("errors", [])
        if not errors:
            return

        self._print("\nErrors:")
        for error in errors:
            self._print(f"  - {error['scenario']}: {error['error']}")

    def print_full_report(self):
        self.print_summary()
        self.print_errors()

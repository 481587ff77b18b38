"""Tests for JSON and console reporting."""

import io
import json

import pytest

from scenario_core import Scenario, ScenarioRunner
from scenario_core.reporter import ConsoleReporter, ReportGenerator


class green(Scenario):
    def when_fine(self):
        self.verify = lambda: None


class red(Scenario):
    def when_broken(self):
        def fails():
            assert 1 == 2, "one is not two"

        self.verify = fails

    def fail_context(self):
        pass


class aborted(Scenario):
    def when_unwrapped(self):
        raise KeyError("missing")


@pytest.fixture
def run_result():
    return ScenarioRunner([green, red, aborted], output=io.StringIO()).run()


class TestReportGenerator:
    """Tests for ReportGenerator."""

    def test_structure(self, run_result):
        """Reports carry version, metadata, summary and results."""
        report = ReportGenerator(run_result, run_id="run-1").to_dict()

        assert report["version"] == "1.0"
        assert report["metadata"]["run_id"] == "run-1"
        assert "hostname" in report["metadata"]
        assert report["summary"]["status"] == "FAIL"
        assert "results" not in report["summary"]
        assert len(report["results"]) == 3

    def test_transcripts_can_be_omitted(self, run_result):
        """include_transcripts=False strips per-scenario transcripts."""
        report = ReportGenerator(run_result).to_dict(include_transcripts=False)
        assert all("transcript" not in r for r in report["results"])

        full = ReportGenerator(run_result).to_dict()
        assert full["results"][0]["transcript"].startswith("green\n")

    def test_write_json(self, run_result, tmp_path):
        """write_json creates parent directories."""
        path = ReportGenerator(run_result).write_json(str(tmp_path / "reports" / "run.json"))

        data = json.loads(path.read_text())
        assert data["summary"]["failed_scenarios"] == ["red", "aborted"]


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_summary(self, run_result):
        """The summary lists every scenario and the totals."""
        output = io.StringIO()
        ConsoleReporter(run_result, output=output).print_full_report()
        text = output.getvalue()

        assert "SCENARIO SUMMARY" in text
        assert "[PASS ] green" in text
        assert "[FAIL ] red" in text
        assert "[ERROR] aborted" in text
        assert "Scenarios: 1/3 passed, 2 failed, 0 skipped" in text
        assert "Conditions: 1 passed, 1 failed, 0 pending, 0 skipped" in text
        assert "Status: FAIL" in text
        assert "Errors:" in text

    def test_verbose_lists_failed_conditions(self, run_result):
        """Verbose mode shows failing conditions under their scenario."""
        output = io.StringIO()
        ConsoleReporter(run_result, verbose=True, output=output).print_summary()

        assert "when broken: AssertionError: one is not two" in output.getvalue()

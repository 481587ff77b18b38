"""Tests for transcript rendering."""

import io

from scenario_core import ActionInvocationError, ConditionStatus, TestCondition
from scenario_core.verbalizer import Verbalizer, clean_exception, failures_banner


def failed_condition(name, exc):
    condition = TestCondition(name, lambda: None)
    try:
        try:
            raise exc
        except Exception as e:
            raise ActionInvocationError(str(e)) from e
    except ActionInvocationError as wrapped:
        condition.failed(wrapped)
    return condition


class TestFailuresBanner:
    """Tests for the failure banner."""

    def test_banner(self):
        """Ten stars on each side."""
        assert failures_banner() == "********** FAILURES **********"


class TestCleanException:
    """Tests for clean_exception."""

    def test_no_exception(self):
        """Nothing to render without an exception."""
        assert clean_exception(None) == ""

    def test_without_cause(self):
        """A failure with no underlying cause renders empty."""
        assert clean_exception(ActionInvocationError("bare")) == ""

    def test_cause_message_and_stack(self):
        """The cause's type and message come first, then its stack."""
        condition = failed_condition("x", ValueError("bad value"))
        detail = clean_exception(condition.exception)

        lines = detail.splitlines()
        assert lines[0] == "ValueError: bad value"
        assert any("File" in line for line in lines[1:])

    def test_message_without_text(self):
        """Exceptions without a message render their type name."""
        condition = failed_condition("x", AssertionError())
        assert clean_exception(condition.exception).splitlines()[0] == "AssertionError"


class TestVerbalizer:
    """Tests for Verbalizer."""

    def test_indentation(self):
        """Indentation is one tab per level."""
        verbalizer = Verbalizer()
        verbalizer.scenario_header("stack")
        verbalizer.example_header("when empty")
        verbalizer.status(TestCondition("pops nothing"), ConditionStatus.PASSED, indent=2)

        assert verbalizer.text() == "stack\n\twhen empty\n\t\tpops nothing : passed\n"

    def test_skipped_header(self):
        """Skipped scenarios are annotated."""
        verbalizer = Verbalizer()
        verbalizer.scenario_header("stack", skipped=True)
        assert verbalizer.lines == ["stack (skipped)"]

    def test_tag_banner(self):
        """Tags are listed under a Tag(s): line, followed by a blank line."""
        verbalizer = Verbalizer()
        verbalizer.tag_banner(["fast", "db"])
        assert verbalizer.lines == ["Tag(s):", "fast", "db", ""]

    def test_no_tags_no_banner(self):
        """An empty tag list renders nothing."""
        verbalizer = Verbalizer()
        verbalizer.tag_banner([])
        assert verbalizer.lines == []

    def test_failures_section(self):
        """Each failed condition gets a FAILED line and its detail."""
        verbalizer = Verbalizer()
        verbalizer.failures([failed_condition("it sorts", AssertionError("unsorted"))])

        assert verbalizer.lines[0] == failures_banner()
        assert verbalizer.lines[1] == ">> it sorts - FAILED"
        assert verbalizer.lines[2].startswith("AssertionError: unsorted")

    def test_no_failures_no_section(self):
        """Without failures nothing is rendered."""
        verbalizer = Verbalizer()
        verbalizer.failures([])
        assert verbalizer.text() == ""

    def test_emit(self):
        """emit() writes the transcript to the sink and returns it."""
        sink = io.StringIO()
        verbalizer = Verbalizer()
        verbalizer.scenario_header("stack")

        text = verbalizer.emit(sink)

        assert text == "stack\n"
        assert sink.getvalue() == "stack\n"

    def test_emit_defaults_to_stdout(self, capsys):
        """Without a sink the transcript goes to standard output."""
        verbalizer = Verbalizer()
        verbalizer.scenario_header("stack")
        verbalizer.emit()
        assert capsys.readouterr().out == "stack\n"

    def test_clear(self):
        """clear() discards accumulated lines."""
        verbalizer = Verbalizer()
        verbalizer.line("x")
        verbalizer.clear()
        assert verbalizer.text() == ""

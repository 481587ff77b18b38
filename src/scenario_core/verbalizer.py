r"""
Verbalizer - renders the human-readable transcript of an execution cycle.

Transcript layout:

    Tag(s):
    focus

    calculator addition
    \twhen adding two positive numbers
    \t\tit should equal 3 : passed

    \twhen checking the display : failed

    ********** FAILURES **********
    >> when checking the display - FAILED
    AssertionError: expected 0
      File "...", line 12, in <lambda>
"""

import logging
import sys
import traceback
from typing import Iterable, List, Optional, TextIO

from .actions import ConditionStatus, TestCondition

logger = logging.getLogger(__name__)

BANNER_CHARACTER_COUNT = 10
INDENT = "\t"


def failures_banner() -> str:
    stars = "*" * BANNER_CHARACTER_COUNT
    return f"{stars} FAILURES {stars}"


def clean_exception(exception: Optional[BaseException]) -> str:
    """
    Render the underlying cause of a captured condition failure.

    Condition failures are captured wrapped, with the exception raised by
    the condition as ``__cause__``. The detail is that cause's message lines
    followed by its traceback. A failure without an underlying cause
    renders as an empty string.
    """
    if exception is None or exception.__cause__ is None:
        return ""

    cause = exception.__cause__
    text = str(cause)
    header = f"{type(cause).__name__}: {text}" if text else type(cause).__name__
    lines = [line for line in header.splitlines() if line.strip()]

    stack = "".join(traceback.format_tb(cause.__traceback__)).rstrip()
    if stack:
        lines.append(stack)
    return "\n".join(lines)


class Verbalizer:
    """
    Accumulates transcript lines for one execution cycle.

    Attributes:
        lines: Rendered lines, without trailing newlines
    """

    def __init__(self):
        self.lines: List[str] = []

    def line(self, text: str = "", indent: int = 0) -> None:
        self.lines.append(f"{INDENT * indent}{text}")

    def tag_banner(self, tags: Iterable[str]) -> None:
        tags = list(tags)
        if not tags:
            return
        self.line("Tag(s):")
        for tag in tags:
            self.line(tag)
        self.line()

    def scenario_header(self, name: str, skipped: bool = False) -> None:
        self.line(f"{name} (skipped)" if skipped else name)

    def example_header(self, name: str) -> None:
        self.line(name, indent=1)

    def status(self, condition: TestCondition, status: ConditionStatus, indent: int) -> None:
        self.line(f"{condition} : {status.value}", indent=indent)

    def failures(self, conditions: List[TestCondition]) -> None:
        """Render the aggregated failure section; nothing if no failures."""
        if not conditions:
            return
        self.line(failures_banner())
        for condition in conditions:
            self.line(f">> {condition} - FAILED")
            self.line(clean_exception(condition.exception))

    def text(self) -> str:
        if not self.lines:
            return ""
        return "\n".join(self.lines) + "\n"

    def emit(self, output: Optional[TextIO] = None) -> str:
        """Write the transcript to the sink and return it."""
        text = self.text()
        stream = output or sys.stdout
        stream.write(text)
        stream.flush()
        logger.debug("Transcript:\n%s", text)
        return text

    def clear(self) -> None:
        self.lines = []

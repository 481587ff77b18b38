"""
Result snapshots of an execution cycle.

The executor builds a ScenarioResult before resetting the scenario's cycle
state, so runners and tests can inspect outcomes after ``execute()`` returns.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .actions import ConditionStatus, TestCondition
from .compiler import TestExample

# Status of a condition whose example was aborted before it was evaluated
NOT_RUN = "not-run"


@dataclass
class ConditionResult:
    """
    Outcome of one condition.

    Attributes:
        name: Rendered condition name
        status: passed, failed, pending, skipped or not-run
        error: Failure description (empty unless failed)
    """
    name: str
    status: str
    error: str = ""

    @classmethod
    def from_condition(cls, condition: TestCondition) -> "ConditionResult":
        status = condition.status.value if condition.status is not None else NOT_RUN
        error = ""
        if condition.exception is not None:
            cause = condition.exception.__cause__ or condition.exception
            error = f"{type(cause).__name__}: {cause}"
        return cls(name=str(condition), status=status, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status, "error": self.error}


@dataclass
class ExampleResult:
    """Outcome of one example and its conditions."""
    name: str
    skipped: bool = False
    conditions: List[ConditionResult] = field(default_factory=list)

    @classmethod
    def from_example(cls, example: TestExample) -> "ExampleResult":
        return cls(
            name=example.display_name,
            skipped=example.skipped,
            conditions=[ConditionResult.from_condition(c) for c in example.all_conditions()],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "skipped": self.skipped,
            "conditions": [c.to_dict() for c in self.conditions],
        }


@dataclass
class ScenarioResult:
    """
    Outcome of one execution cycle of a scenario.

    Attributes:
        scenario: Normalized scenario name
        skipped: True if the scenario type is marked skipped
        tags: Tag names shown in the transcript banner
        examples: Per-example results in execution order
        transcript: Full rendered transcript
        error: Error message, if the cycle was aborted
        duration_ms: Wall time of the cycle, when measured by a runner
    """
    scenario: str
    skipped: bool = False
    tags: List[str] = field(default_factory=list)
    examples: List[ExampleResult] = field(default_factory=list)
    transcript: str = ""
    error: Optional[str] = None
    duration_ms: int = 0

    def count(self, status: ConditionStatus) -> int:
        return sum(
            1
            for example in self.examples
            for condition in example.conditions
            if condition.status == status.value
        )

    @property
    def passed(self) -> int:
        return self.count(ConditionStatus.PASSED)

    @property
    def failed(self) -> int:
        return self.count(ConditionStatus.FAILED)

    @property
    def pending(self) -> int:
        return self.count(ConditionStatus.PENDING)

    @property
    def skipped_conditions(self) -> int:
        return self.count(ConditionStatus.SKIPPED)

    @property
    def status(self) -> str:
        if self.error is not None:
            return "ERROR"
        if self.failed:
            return "FAIL"
        if self.skipped:
            return "SKIP"
        return "PASS"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scenario": self.scenario,
            "status": self.status,
            "skipped": self.skipped,
            "tags": list(self.tags),
            "passed": self.passed,
            "failed": self.failed,
            "pending": self.pending,
            "skipped_conditions": self.skipped_conditions,
            "examples": [e.to_dict() for e in self.examples],
            "error": self.error,
            "duration_ms": self.duration_ms,
            "transcript": self.transcript,
        }

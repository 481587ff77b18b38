"""
Scenario executor - phase 2 of the two-phase protocol.

One execution cycle moves through these phases:

    IDLE -> ARRANGING -> RUNNING_EXAMPLES -> TEARING_DOWN -> REPORTED -> IDLE

Arrange methods run once, then every selected example is compiled and
executed (pre-actions, act methods, conditions, post-actions), then teardown
methods run once. Condition failures are captured and reported; they never
abort sibling conditions or examples. Structural errors abort the cycle.

Example usage:
    executor = ScenarioExecutor(scenario)
    result = executor.run_cycle()
    print(result.status)
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, List

from .actions import ConditionStatus, TestCondition
from .compiler import ScenarioCompiler, TestExample
from .errors import ActionInvocationError, AmbiguousAssertionError, StructuralError
from .results import ExampleResult, ScenarioResult

if TYPE_CHECKING:
    from .scenario import Scenario

logger = logging.getLogger(__name__)


class ExecutionPhase(Enum):
    """Phase of a scenario's execution cycle."""
    IDLE = "idle"
    ARRANGING = "arranging"
    RUNNING_EXAMPLES = "running-examples"
    TEARING_DOWN = "tearing-down"
    REPORTED = "reported"


class ScenarioExecutor:
    """
    Runs execution cycles for one scenario instance.

    The executor is not locked itself; ``Scenario.execute()`` holds the
    instance lock around ``run_cycle()``.
    """

    def __init__(self, scenario: "Scenario"):
        self.scenario = scenario
        self.compiler = ScenarioCompiler(scenario)

    def _enter(self, phase: ExecutionPhase) -> None:
        logger.debug(
            "%s: %s -> %s",
            type(self.scenario).__name__,
            self.scenario.execution_phase.value,
            phase.value,
        )
        self.scenario.execution_phase = phase

    def run_cycle(self) -> ScenarioResult:
        """
        Run one full execution cycle and reset the scenario afterwards.

        Returns:
            ScenarioResult for the cycle (also stored on ``last_result``)

        Raises:
            StructuralError: If an example is not executable as written
        """
        scenario = self.scenario
        scenario.reset_state()
        scenario.classification = scenario.classify()
        classification = scenario.classification
        verbalizer = scenario.verbalizer

        result = ScenarioResult(
            scenario=scenario.normalize(type(scenario).__name__),
            skipped=classification.skipped,
            tags=list(classification.tags),
        )
        scenario.last_result = None

        try:
            verbalizer.tag_banner(classification.tags)
            verbalizer.scenario_header(result.scenario, classification.skipped)

            self._enter(ExecutionPhase.ARRANGING)
            for method in classification.arrange:
                getattr(scenario, method.name)()

            self._enter(ExecutionPhase.RUNNING_EXAMPLES)
            act_methods = [getattr(scenario, m.name) for m in classification.act]
            for method in classification.examples:
                example = self.compiler.compile(method, act_methods)
                scenario.examples.append(example)
                if example.skipped:
                    self.render_skipped(example)
                else:
                    self.execute(example)
                verbalizer.line()

            self._enter(ExecutionPhase.TEARING_DOWN)
            for method in classification.teardown:
                getattr(scenario, method.name)()

            failed = scenario.failed_conditions()
            verbalizer.failures(failed)

            self._enter(ExecutionPhase.REPORTED)
            result.transcript = verbalizer.emit(scenario.output)
            result.examples = [ExampleResult.from_example(e) for e in scenario.examples]
            scenario.last_result = result

            if failed:
                scenario.fail_context()
            return result
        except StructuralError as e:
            result.error = str(e)
            logger.debug("%s aborted: %s", type(scenario).__name__, e)
            raise
        finally:
            if scenario.last_result is None:
                result.transcript = verbalizer.text()
                result.examples = [ExampleResult.from_example(e) for e in scenario.examples]
                scenario.last_result = result
            scenario.reset_state()

    def execute(self, example: TestExample) -> None:
        """
        Execute one compiled example.

        Raises:
            AmbiguousAssertionError: If the example declares both ``verify``
                and named conditions; nothing is run in that case
        """
        if example.is_ambiguous:
            raise AmbiguousAssertionError(
                f"The example method '{example.display_name}' declares both 'verify' and named "
                "conditions (it[\"...\"]). Restructure it to use either named conditions or "
                "'verify'.",
                example=example.display_name,
            )

        for action in example.pre_actions:
            action.invoke()

        for act in example.act_methods:
            act()

        if example.verify_condition is not None:
            self.evaluate(example.verify_condition, example, indent=1)
        else:
            self.scenario.verbalizer.example_header(example.display_name)
            for condition in example.conditions:
                self.evaluate(condition, example, indent=2)

        for action in example.post_actions:
            action.invoke()

    def render_skipped(self, example: TestExample) -> None:
        conditions: List[TestCondition] = example.all_conditions()
        for condition in conditions:
            self.evaluate(condition, example, indent=1)

    def evaluate(self, condition: TestCondition, example: TestExample, indent: int = 2) -> ConditionStatus:
        """Evaluate one condition, record its status and render its line."""
        if example.skipped:
            status = ConditionStatus.SKIPPED
        elif condition.is_pending:
            status = ConditionStatus.PENDING
        else:
            try:
                condition.invoke()
            except ActionInvocationError as e:
                condition.failed(e)
            status = ConditionStatus.FAILED if condition.exception is not None else ConditionStatus.PASSED

        condition.status = status
        self.scenario.verbalizer.status(condition, status, indent)
        return status

"""
Scenario base type.

A scenario is a class of convention-named methods describing one subject
under test. Example methods never assert directly: they record deferred
work in the ``establish``, ``because``, ``verify`` and ``cleanup`` slots and
register named conditions with ``it``:

    class calculator_addition(Scenario):
        def given_a_calculator(self):
            self.calculator = Calculator()

        def when_adding_two_positive_numbers(self):
            def establish():
                self.value = 0

            def because():
                self.value = self.calculator.add(1, 2)

            def should_equal_three():
                assert self.value == 3

            self.establish = establish
            self.because = because
            self.it["should equal 3"] = should_equal_three
            self.it["should round trip through the display"] = todo

    calculator_addition().execute()

Each ``execute()`` call is a full, independent cycle: the instance resets
its slots, compiled examples and transcript before and after running.
"""

import logging
import threading
from typing import Any, Callable, List, Optional, TextIO

from .actions import NamedCondition, TestCondition
from .classifier import (
    DEFAULT_SEPARATOR,
    METHOD_ORDER_DECLARATION,
    ROOT_ATTRIBUTE,
    Classification,
    classify,
)
from .compiler import CompilationContext, TestExample
from .errors import ReentrantExecutionError
from .executor import ExecutionPhase, ScenarioExecutor
from .results import ScenarioResult
from .verbalizer import Verbalizer

logger = logging.getLogger(__name__)


def normalize(text: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Render a method or type name for humans: separators become spaces."""
    return text.replace(separator, " ")


class Scenario:
    """
    Base class for behavior scenarios.

    Class attributes:
        separator: Word separator in method names (default '_')
        method_order: 'declaration' or 'legacy' ordering of inherited methods
        output: Transcript sink (default: sys.stdout at emission time)

    Attributes:
        examples: Examples compiled during the current cycle
        execution_phase: Current ExecutionPhase
        last_result: ScenarioResult of the most recent cycle
    """

    __scenario_root__ = True

    separator: str = DEFAULT_SEPARATOR
    method_order: str = METHOD_ORDER_DECLARATION
    output: Optional[TextIO] = None

    def __init__(self, *args: Any, **kwargs: Any):
        # cooperative, so host adapters can mix in their own base type
        super().__init__(*args, **kwargs)
        self._execute_lock = threading.Lock()
        self._cycle_thread: Optional[int] = None
        self._context = CompilationContext()
        self.examples: List[TestExample] = []
        self.verbalizer = Verbalizer()
        self.execution_phase = ExecutionPhase.IDLE
        self.last_result: Optional[ScenarioResult] = None
        self.classification: Classification = self.classify()
        self._executor = ScenarioExecutor(self)

    # Slots

    @property
    def establish(self) -> Optional[Callable[[], None]]:
        """Action that sets up the initial context for the example's conditions."""
        return self._context.establish

    @establish.setter
    def establish(self, action: Optional[Callable[[], None]]) -> None:
        self._context.establish = action

    @property
    def because(self) -> Optional[Callable[[], None]]:
        """Action under inspection by the example's conditions."""
        return self._context.because

    @because.setter
    def because(self, action: Optional[Callable[[], None]]) -> None:
        self._context.because = action

    @property
    def verify(self) -> Optional[Callable[[], None]]:
        """Single unnamed assertion; the example's name becomes the condition name."""
        return self._context.verify

    @verify.setter
    def verify(self, action: Optional[Callable[[], None]]) -> None:
        self._context.verify = action

    @property
    def cleanup(self) -> Optional[Callable[[], None]]:
        """Action that restores anything the example changed."""
        return self._context.cleanup

    @cleanup.setter
    def cleanup(self, action: Optional[Callable[[], None]]) -> None:
        self._context.cleanup = action

    @property
    def it(self) -> NamedCondition:
        """Register a named condition: ``self.it["name"] = action``."""
        return self._context.registry.new()

    # Execution

    def classify(self) -> Classification:
        return classify(type(self), self.separator, self.method_order)

    def execute(self) -> None:
        """
        Run one full execution cycle. Safe to call repeatedly.

        Raises:
            ReentrantExecutionError: If called from inside this instance's
                own cycle (a condition or failure hook re-running it)
        """
        if self._cycle_thread == threading.get_ident():
            raise ReentrantExecutionError(
                f"{self.normalize(type(self).__name__)}: execute() was called from inside its "
                "own execution cycle. Run the scenario again after execute() returns."
            )
        with self._execute_lock:
            self._cycle_thread = threading.get_ident()
            try:
                self._executor.run_cycle()
            finally:
                self._cycle_thread = None

    def fail_context(self) -> None:
        """
        Failure hook, called once per cycle when any condition failed.

        Host adapters override this to raise their framework's failure.
        """
        logger.error(
            "Scenario failed: %s (%d failed condition(s))",
            self.normalize(type(self).__name__),
            len(self.failed_conditions()),
        )

    def failed_conditions(self) -> List[TestCondition]:
        """Failed conditions of the current cycle, in example order."""
        failed: List[TestCondition] = []
        for example in self.examples:
            failed.extend(example.failed_conditions())
        return failed

    def normalize(self, text: str) -> str:
        return normalize(text, self.separator)

    def reset_state(self) -> None:
        """Return the instance to its initial empty configuration."""
        self._context = CompilationContext()
        self.examples = []
        self.verbalizer.clear()
        self.execution_phase = ExecutionPhase.IDLE


def is_concrete_scenario(obj: Any) -> bool:
    """True for Scenario subclasses that are not root or adapter types."""
    return (
        isinstance(obj, type)
        and issubclass(obj, Scenario)
        and not obj.__dict__.get(ROOT_ATTRIBUTE, False)
    )

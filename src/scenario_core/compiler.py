"""
Scenario compiler - phase 1 of the two-phase protocol.

Phase 1 invokes an example method once with a fresh compilation context
installed on the scenario. The method body only records deferred work: it
assigns the ``establish``, ``because``, ``verify`` and ``cleanup`` slots and
registers named conditions through ``it[...]``. The harvested work is frozen
into a ``TestExample`` that the executor runs in phase 2.

Any exception raised directly by the example body means observation code
ran outside a deferred block; it is reported as a ``WrappingViolationError``.

Example usage:
    compiler = ScenarioCompiler(scenario)
    example = compiler.compile(declared_method, act_methods)
    print(example.display_name, len(example.conditions))
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from .actions import ConditionRegistry, InvokableAction, NamedCondition, TestCondition
from .classifier import DeclaredMethod
from .errors import WrappingViolationError

if TYPE_CHECKING:
    from .scenario import Scenario

logger = logging.getLogger(__name__)


class CompilationContext:
    """
    The slot set and condition registry for a single phase-1 call.

    Attributes:
        establish: Action that sets up the initial context
        because: Action under inspection
        verify: Single anonymous assertion for the example
        cleanup: Action restoring whatever the example changed
        registry: Named conditions registered through ``it[...]``
    """

    def __init__(self):
        self.establish: Optional[Callable[[], None]] = None
        self.because: Optional[Callable[[], None]] = None
        self.verify: Optional[Callable[[], None]] = None
        self.cleanup: Optional[Callable[[], None]] = None
        self.registry = ConditionRegistry()

    def clear(self) -> None:
        self.establish = None
        self.because = None
        self.verify = None
        self.cleanup = None
        self.registry.clear()

    def is_empty(self) -> bool:
        return (
            self.establish is None
            and self.because is None
            and self.verify is None
            and self.cleanup is None
            and len(self.registry) == 0
        )


@dataclass
class TestExample:
    """
    One compiled example method.

    Attributes:
        name: Raw method name
        display_name: Name with separators rendered as spaces
        skipped: True if the example belongs to a skipped type
        tag: Tag display name, if any
        pre_actions: establish then because, when set
        post_actions: cleanup, when set
        verify_condition: Condition synthesized from ``verify``, if set
        conditions: Named conditions in registration order
        act_methods: Bound act methods shared by all examples of the scenario
    """
    __test__ = False

    name: str
    display_name: str
    skipped: bool = False
    tag: str = ""
    pre_actions: List[InvokableAction] = field(default_factory=list)
    post_actions: List[InvokableAction] = field(default_factory=list)
    verify_condition: Optional[TestCondition] = None
    conditions: List[NamedCondition] = field(default_factory=list)
    act_methods: List[Callable[[], None]] = field(default_factory=list)

    @property
    def is_ambiguous(self) -> bool:
        """True if both ``verify`` and named conditions were declared."""
        return self.verify_condition is not None and bool(self.conditions)

    def all_conditions(self) -> List[TestCondition]:
        result: List[TestCondition] = list(self.conditions)
        if self.verify_condition is not None:
            result.append(self.verify_condition)
        return result

    def failed_conditions(self) -> List[TestCondition]:
        return [c for c in self.all_conditions() if c.exception is not None]


class ScenarioCompiler:
    """Turns declared example methods into TestExamples for one scenario instance."""

    def __init__(self, scenario: "Scenario"):
        self.scenario = scenario

    def compile(
        self,
        method: DeclaredMethod,
        act_methods: Sequence[Callable[[], None]] = (),
    ) -> TestExample:
        """
        Run phase 1 for one example method.

        Examples of a skipped type are compiled by name only; their method
        is not invoked and the example gets a placeholder headline condition.

        Args:
            method: Classified example method
            act_methods: Bound act methods to run for this example

        Returns:
            The compiled TestExample

        Raises:
            WrappingViolationError: If the example body raises
        """
        example = TestExample(
            name=method.name,
            display_name=self.scenario.normalize(method.name),
            skipped=method.skipped,
            tag=method.tag,
            act_methods=list(act_methods),
        )
        if example.skipped:
            # headline only, so the skip shows up as one status line
            example.verify_condition = TestCondition(example.display_name)
            return example

        context = CompilationContext()
        self.scenario._context = context
        try:
            try:
                getattr(self.scenario, method.name)()
            except Exception as e:
                raise WrappingViolationError(
                    f"The example method '{example.display_name}' has code that is not wrapped in "
                    "an 'it' named condition, 'verify', 'establish' or 'because' block and raised "
                    f"{type(e).__name__} while its conditions were being collected. Move the code "
                    "that examines variables into one of those blocks so it runs when the example "
                    "executes.",
                    example=example.display_name,
                ) from e
            self._harvest(example, context)
        finally:
            context.clear()
            self.scenario._context = CompilationContext()

        logger.debug(
            "Compiled example %s: %d pre-action(s), %d condition(s), verify=%s",
            example.name,
            len(example.pre_actions),
            len(example.conditions),
            example.verify_condition is not None,
        )
        return example

    def _harvest(self, example: TestExample, context: CompilationContext) -> None:
        if context.verify is not None:
            example.verify_condition = TestCondition(example.display_name, context.verify)

        example.conditions = context.registry.conditions()

        if context.establish is not None:
            example.pre_actions.append(InvokableAction(context.establish))
        if context.because is not None:
            example.pre_actions.append(InvokableAction(context.because))
        if context.cleanup is not None:
            example.post_actions.append(InvokableAction(context.cleanup))

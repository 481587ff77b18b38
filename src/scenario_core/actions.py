"""
Deferred action primitives.

An ``InvokableAction`` wraps a no-argument callable and runs it at most
once. A ``TestCondition`` is a named invokable action whose outcome is
recorded: a captured exception means the condition failed, no exception
means it passed.

Example usage:
    from scenario_core.actions import TestCondition, todo

    condition = TestCondition("returns the sum", lambda: check_sum())
    condition.invoke()
    if condition.exception is not None:
        print("failed")

    pending = TestCondition("handles overflow", todo)
    assert pending.is_pending
"""

from enum import Enum
from typing import Callable, List, Optional

from .errors import ActionInvocationError


def todo() -> None:
    """Marker for a condition that is not written yet; it is never invoked."""


class ConditionStatus(str, Enum):
    """Outcome of evaluating a single condition."""
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    SKIPPED = "skipped"


class InvokableAction:
    """
    A no-argument callable guarded so that it executes at most once.

    Attributes:
        action: The wrapped callable (may be None for an empty action)
        is_invoked: True once invoke() has been called
    """

    def __init__(self, action: Optional[Callable[[], None]]):
        self.action = action
        self.is_invoked = False

    def invoke(self) -> None:
        """
        Run the wrapped callable unless it already ran.

        Raises:
            ActionInvocationError: If the callable raises; the original
                exception is chained as the cause
        """
        if self.is_invoked:
            return
        self.is_invoked = True

        if self.action is None:
            return

        try:
            self.action()
        except (KeyboardInterrupt, SystemExit, GeneratorExit):
            raise
        except BaseException as e:
            # test helpers such as pytest.fail() raise BaseException subclasses
            raise ActionInvocationError(
                f"Action {_callable_name(self.action)} raised {type(e).__name__}"
            ) from e

    def is_defined(self) -> bool:
        return self.action is not None

    def is_defined_by(self, candidate: Callable[[], None]) -> bool:
        return self.action is candidate


class TestCondition:
    """
    A named assertion with a single-invocation guard and a recorded outcome.

    The first captured exception is kept: later calls to failed() do not
    replace it.

    Attributes:
        name: Free-text name supplied by the scenario author
        exception: Captured failure, or None
        status: Outcome once evaluated, or None
    """

    __test__ = False

    def __init__(self, name: str = "", action: Optional[Callable[[], None]] = None):
        self.name = name
        self._action = InvokableAction(action)
        self.exception: Optional[BaseException] = None
        self.status: Optional[ConditionStatus] = None

    def __setitem__(self, name: str, action: Callable[[], None]) -> None:
        self.name = name
        self._action = InvokableAction(action)

    @property
    def is_invoked(self) -> bool:
        return self._action.is_invoked

    @property
    def is_pending(self) -> bool:
        return self._action.is_defined_by(todo)

    def is_action_defined(self) -> bool:
        return self._action.is_defined()

    def invoke(self) -> None:
        self._action.invoke()

    def failed(self, exception: BaseException) -> None:
        if self.exception is None:
            self.exception = exception

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TestCondition({self.name!r}, status={self.status})"


class NamedCondition(TestCondition):
    """A condition registered through ``it[...]``; rendered with an ``it`` prefix."""

    def __str__(self) -> str:
        if self.name == "it" or self.name.startswith("it "):
            return self.name
        return f"it {self.name}"


class ConditionRegistry:
    """
    Ordered collection of named conditions declared during one example call.

    Each access to ``new()`` registers an empty condition, which the caller
    then names and binds with the indexer:

        registry.new()["returns the sum"] = lambda: ...
    """

    def __init__(self):
        self._conditions: List[NamedCondition] = []

    def new(self) -> NamedCondition:
        condition = NamedCondition()
        self._conditions.append(condition)
        return condition

    def conditions(self) -> List[NamedCondition]:
        """Registered conditions that were given an action, in registration order."""
        return [c for c in self._conditions if c.is_action_defined()]

    def clear(self) -> None:
        self._conditions = []

    def __len__(self) -> int:
        return len(self.conditions())


def _callable_name(action: Callable[[], None]) -> str:
    return getattr(action, "__qualname__", None) or repr(action)

"""
Error taxonomy for scenario execution.

Assertion failures are never raised from here: they are captured on the
condition that produced them. The classes below cover the problems a host
runner must see as errors rather than as failed conditions.
"""


class ScenarioError(Exception):
    """Base class for all engine errors."""


class StructuralError(ScenarioError):
    """
    A scenario is written in a shape the engine cannot execute.

    Structural errors abort the current execution cycle and propagate to the
    host. They are distinct from assertion failures, which only surface in
    the transcript and through the failure hook.
    """

    def __init__(self, message: str, example: str = ""):
        super().__init__(message)
        self.example = example


class WrappingViolationError(StructuralError):
    """An example method raised while its deferred work was being collected."""


class AmbiguousAssertionError(StructuralError):
    """An example set ``verify`` and also registered named conditions."""


class ReentrantExecutionError(StructuralError):
    """``execute()`` was called from inside the same instance's running cycle."""


class ActionInvocationError(ScenarioError):
    """
    Raised when a deferred action fails.

    The exception raised by the wrapped callable is available as
    ``__cause__``.
    """

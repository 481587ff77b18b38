"""
scenario-core: Convention-driven behavior scenarios.

A scenario is a class of ordinary methods whose names declare their role.
Example methods record deferred work in four slots (``establish``,
``because``, ``verify``, ``cleanup``) and register named conditions with
``it``; the engine collects that work, runs it with failure isolation and
prints a transcript.

Quick Start:
    from scenario_core import Scenario, todo

    class calculator_addition(Scenario):
        def when_adding_two_positive_numbers(self):
            def establish():
                self.value = 0

            def because():
                self.value = 1 + 2

            def equals_three():
                assert self.value == 3

            self.establish = establish
            self.because = because
            self.it["should equal 3"] = equals_three
            self.it["should handle overflow"] = todo

    calculator_addition().execute()

Output:
    calculator addition
    	when adding two positive numbers
    		it should equal 3 : passed
    		it should handle overflow : pending

Running from unittest or pytest:
    from scenario_core.adapters import UnitTestScenario

    class calculator_addition(UnitTestScenario):
        ...

Running from the command line:
    scenario run specs/
"""

__version__ = "0.1.0"

# Primitive exports
from .actions import (
    ConditionStatus,
    InvokableAction,
    NamedCondition,
    TestCondition,
    todo,
)

# Marker exports
from .markers import skip, tag

# Engine exports
from .classifier import Classification, DeclaredMethod, Role, classify
from .compiler import CompilationContext, ScenarioCompiler, TestExample
from .executor import ExecutionPhase, ScenarioExecutor
from .results import ConditionResult, ExampleResult, ScenarioResult
from .scenario import Scenario, normalize

# Error exports
from .errors import (
    ActionInvocationError,
    AmbiguousAssertionError,
    ReentrantExecutionError,
    ScenarioError,
    StructuralError,
    WrappingViolationError,
)

# Runner exports
from .config import RunnerConfig, load_config
from .runner import ScenarioRunner, discover_scenarios

__all__ = [
    # Version
    "__version__",
    # Primitives
    "ConditionStatus",
    "InvokableAction",
    "NamedCondition",
    "TestCondition",
    "todo",
    # Markers
    "skip",
    "tag",
    # Engine
    "Scenario",
    "normalize",
    "Classification",
    "DeclaredMethod",
    "Role",
    "classify",
    "CompilationContext",
    "ScenarioCompiler",
    "TestExample",
    "ExecutionPhase",
    "ScenarioExecutor",
    "ConditionResult",
    "ExampleResult",
    "ScenarioResult",
    # Errors
    "ScenarioError",
    "StructuralError",
    "WrappingViolationError",
    "AmbiguousAssertionError",
    "ReentrantExecutionError",
    "ActionInvocationError",
    # Runner
    "RunnerConfig",
    "load_config",
    "ScenarioRunner",
    "discover_scenarios",
]

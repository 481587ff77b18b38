"""
Scenario runner - discovers scenario types and runs them in sequence.

The runner is the command-line host for the engine: it imports scenario
files, executes every concrete scenario once, and summarizes the outcome.
Condition failures are read from each scenario's result; structural errors
and other exceptions are recorded per scenario and never stop the run
unless ``fail_fast`` is set.

Example usage:
    from scenario_core.runner import ScenarioRunner, discover_scenarios

    scenarios = discover_scenarios(["specs"])
    runner = ScenarioRunner(scenarios)
    result = runner.run()
    print(f"Status: {result['status']}")
"""

import importlib
import importlib.util
import logging
import sys
import time
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO, Union

from .classifier import classify, is_root, scenario_chain
from .config import DEFAULT_PATTERN
from .errors import StructuralError
from .results import ScenarioResult
from .scenario import Scenario, is_concrete_scenario, normalize

logger = logging.getLogger(__name__)


def scenarios_in_module(module: ModuleType) -> List[type]:
    """Concrete public scenario types defined in a module, in definition order."""
    return [
        obj
        for name, obj in vars(module).items()
        if not name.startswith("_")
        and is_concrete_scenario(obj)
        and obj.__module__ == module.__name__
    ]


def load_scenarios_from_module(name: str) -> List[type]:
    """Import a module by name and return its scenario types."""
    return scenarios_in_module(importlib.import_module(name))


def load_scenarios_from_file(path: Union[str, Path]) -> List[type]:
    """
    Import a Python file and return its scenario types.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ImportError: If the file cannot be loaded as a module
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    module_name = f"scenario_specs.{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load scenario file: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    logger.debug("Loaded scenario file %s", path)
    return scenarios_in_module(module)


def discover_scenarios(paths: Sequence[Union[str, Path]], pattern: str = DEFAULT_PATTERN) -> List[type]:
    """
    Find scenario types in files and directories.

    Directories are searched recursively for files matching ``pattern``;
    files are loaded as given.

    Raises:
        FileNotFoundError: If a path doesn't exist
    """
    scenarios: List[type] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            files = sorted(path.rglob(pattern))
        elif path.exists():
            files = [path]
        else:
            raise FileNotFoundError(f"Scenario path not found: {path}")

        for file in files:
            scenarios.extend(load_scenarios_from_file(file))
    return scenarios


def declares_method_order(cls: type) -> bool:
    """True if a non-root type in the scenario's chain sets ``method_order``."""
    return any("method_order" in vars(klass) for klass in scenario_chain(cls))


class ScenarioRunner:
    """
    Runs scenario types and builds a run summary.

    Example:
        runner = ScenarioRunner([calculator_addition], fail_fast=True)
        result = runner.run()

        for name in result["failed_scenarios"]:
            print(f"Failed: {name}")
    """

    def __init__(
        self,
        scenarios: List[type],
        fail_fast: bool = False,
        method_order: Optional[str] = None,
        output: Optional[TextIO] = None,
        on_scenario_start: Optional[Callable[[type], None]] = None,
        on_scenario_complete: Optional[Callable[[type, ScenarioResult], None]] = None,
    ):
        """
        Initialize the runner.

        Args:
            scenarios: Scenario types to run, in order
            fail_fast: Stop after the first scenario that does not pass
            method_order: Ordering for scenarios that do not declare one
            output: Transcript sink for every scenario (default: stdout)
            on_scenario_start: Optional callback invoked before each scenario
            on_scenario_complete: Optional callback invoked after each scenario
        """
        self.scenarios = [s for s in scenarios if not is_root(s)]
        self.fail_fast = fail_fast
        self.method_order = method_order
        self.output = output
        self.on_scenario_start = on_scenario_start
        self.on_scenario_complete = on_scenario_complete
        self.results: List[ScenarioResult] = []

    def _instantiate(self, cls: type) -> Scenario:
        instance = cls()
        if self.output is not None:
            instance.output = self.output
        if self.method_order and not declares_method_order(cls):
            instance.method_order = self.method_order
        return instance

    def run_scenario(self, cls: type) -> ScenarioResult:
        """
        Execute one scenario type.

        Returns:
            ScenarioResult with status PASS, FAIL, SKIP or ERROR
        """
        if self.on_scenario_start:
            self.on_scenario_start(cls)

        start = time.time()
        instance: Optional[Scenario] = None
        try:
            instance = self._instantiate(cls)
            instance.execute()
            result = instance.last_result
        except StructuralError:
            result = instance.last_result
        except Exception as e:
            result = instance.last_result if instance is not None else None
            if result is None:
                result = ScenarioResult(scenario=normalize(cls.__name__))
            # adapters signal aggregated failures by raising AssertionError
            if not (isinstance(e, AssertionError) and result.failed):
                result.error = f"{type(e).__name__}: {e}"
                logger.warning("Scenario %s raised %s", cls.__name__, result.error)

        result.duration_ms = int((time.time() - start) * 1000)

        if self.on_scenario_complete:
            self.on_scenario_complete(cls, result)
        return result

    def run(self) -> Dict[str, Any]:
        """
        Run all scenarios and return a summary.

        Returns:
            Dictionary containing:
            - status: Overall status (PASS or FAIL)
            - scenarios: Count of scenarios run
            - scenarios_passed / scenarios_failed / scenarios_skipped
            - passed / failed / pending / skipped: Condition counts
            - failed_scenarios: Names of scenarios that failed or errored
            - errors: List of {"scenario", "error"} for aborted scenarios
            - total_duration_ms: Total execution time
            - results: List of ScenarioResult dictionaries
        """
        self.results = []
        for cls in self.scenarios:
            result = self.run_scenario(cls)
            self.results.append(result)
            if self.fail_fast and result.status in ("FAIL", "ERROR"):
                logger.info("Stopping after %s (fail-fast)", result.scenario)
                break
        return self._build_summary()

    def _build_summary(self) -> Dict[str, Any]:
        failed_scenarios = [r.scenario for r in self.results if r.status in ("FAIL", "ERROR")]
        errors = [
            {"scenario": r.scenario, "error": r.error}
            for r in self.results
            if r.error is not None
        ]

        return {
            "status": "FAIL" if failed_scenarios else "PASS",
            "scenarios": len(self.results),
            "scenarios_passed": sum(1 for r in self.results if r.status == "PASS"),
            "scenarios_failed": len(failed_scenarios),
            "scenarios_skipped": sum(1 for r in self.results if r.status == "SKIP"),
            "passed": sum(r.passed for r in self.results),
            "failed": sum(r.failed for r in self.results),
            "pending": sum(r.pending for r in self.results),
            "skipped": sum(r.skipped_conditions for r in self.results),
            "failed_scenarios": failed_scenarios,
            "errors": errors,
            "total_duration_ms": sum(r.duration_ms for r in self.results),
            "results": [r.to_dict() for r in self.results],
        }

    def plan(self) -> Dict[str, Any]:
        """
        Get the classified structure of every scenario without running it.

        No scenario code is executed: example bodies are only invoked by a
        real execution cycle.
        """
        scenarios = []
        for cls in self.scenarios:
            method_order = None if declares_method_order(cls) else self.method_order
            scenarios.append(classify(cls, method_order=method_order).to_dict())

        return {
            "version": "1.0",
            "scenarios": scenarios,
            "summary": {
                "scenarios": len(scenarios),
                "examples": sum(len(s["examples"]) for s in scenarios),
                "skipped": sum(1 for s in scenarios if s["skipped"]),
            },
        }

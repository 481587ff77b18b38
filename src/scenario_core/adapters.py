"""
Host adapters binding scenarios to an outer test framework.

An adapter supplies the entry point the host calls and overrides the failure
hook to raise the host's own failure signal.

    from scenario_core.adapters import UnitTestScenario

    class calculator_addition(UnitTestScenario):
        ...

unittest and pytest both collect ``unittest.TestCase`` subclasses, so a
scenario derived from ``UnitTestScenario`` runs under either as a single
``test_execute`` test.
"""

import unittest

from .classifier import is_root
from .scenario import Scenario


class UnitTestScenario(Scenario, unittest.TestCase):
    """Scenario that runs as one unittest test and fails through ``self.fail``."""

    __scenario_root__ = True

    def test_execute(self):
        if is_root(type(self)):
            self.skipTest("adapter base type has no examples")
        self.execute()

    def fail_context(self):
        failed = self.failed_conditions()
        names = ", ".join(str(c) for c in failed)
        self.fail(
            f"{self.normalize(type(self).__name__)}: {len(failed)} condition(s) failed: {names}"
        )

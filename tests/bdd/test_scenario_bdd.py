"""
Executable BDD scenarios for the scenario engine.

These scenarios are defined in features/calculator.feature.
The step definitions are in tests/bdd/steps/scenario_steps.py.

Running:
    pytest tests/bdd -v
"""

from pytest_bdd import scenarios

# Feature file path (relative to this test file)
FEATURE_FILE = "../../features/calculator.feature"

scenarios(FEATURE_FILE)

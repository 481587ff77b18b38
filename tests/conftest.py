"""Shared fixtures for scenario-core tests."""

import io

import pytest

from scenario_core.classifier import clear_cache


@pytest.fixture(autouse=True)
def _fresh_classification_cache():
    """Scenario types defined inside tests must not leak cached classifications."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def transcript():
    """In-memory transcript sink."""
    return io.StringIO()


@pytest.fixture
def run(transcript):
    """Execute a scenario type once and return the instance."""

    def _run(scenario_type, **attributes):
        scenario = scenario_type()
        scenario.output = transcript
        for name, value in attributes.items():
            setattr(scenario, name, value)
        scenario.execute()
        return scenario

    return _run

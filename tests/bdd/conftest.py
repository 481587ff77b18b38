"""
Pytest configuration for BDD tests.

This module registers the step definitions with pytest-bdd and provides the
shared context dictionary the steps pass state through.
"""

from typing import Any, Dict

import pytest

# Import step definitions to register them with pytest-bdd
from .steps.scenario_steps import *  # noqa: F401,F403


@pytest.fixture
def bdd_context() -> Dict[str, Any]:
    """Mutable state shared by the steps of one BDD scenario."""
    return {}

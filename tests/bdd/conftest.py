"""
Shared fixtures and step definitions for BDD tests.

- regression steps: imported from regressiontest.bdd, shared by all feature files
- regression_context: runs commands in data/, references live in data/regression/
"""

from pathlib import Path

import pytest

from regressiontest.bdd import *  # noqa: F401,F403
from regressiontest.steps import ScenarioContext

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def regression_context():  # noqa: F811
    """ScenarioContext running commands inside the BDD data directory."""
    return ScenarioContext(
        workdir=str(DATA_DIR),
        testdir=str(DATA_DIR / "regression"),
    )

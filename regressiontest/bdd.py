"""
pytest-bdd step definitions for command-line regression features.

Import them into the conftest.py next to your feature files:

    from regressiontest.bdd import *  # noqa: F401,F403

and override `regression_context` there to point at your data:

    @pytest.fixture
    def regression_context():
        return ScenarioContext(workdir="test/data", testdir="test/data/regression")
"""

import pytest
from pytest_bdd import given, when, then, parsers

from regressiontest import steps
from regressiontest.steps import ScenarioContext


@pytest.fixture
def regression_context():
    """Fresh ScenarioContext per scenario."""
    return ScenarioContext()


@given(parsers.re(r'I have input file\(s\) named "(?P<names>.*?)"'))
def input_files_named(regression_context, names):
    steps.have_input_files(regression_context, names)


@when(parsers.re(r'I execute "(?P<command>.*)"'))
def execute(regression_context, command):
    steps.execute_command(regression_context, command)


@then(parsers.re(r'I expect the named output to match the named output "(?P<name>.*?)"'))
def named_output_matches(regression_context, name):
    result = steps.expect_output_matches(regression_context, name)
    assert result.passed, result.describe()


@then(parsers.re(
    r'I expect an error and the named output to match the named output "(?P<name>.*?)" '
    r'in under (?P<seconds>\d+) seconds'
), converters={"seconds": int})
def error_output_matches(regression_context, name, seconds):
    result = steps.expect_error_matches(regression_context, name, seconds)
    assert result.passed, result.describe()

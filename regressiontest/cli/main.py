#!/usr/bin/env python3
"""
Regression Test CLI
Run a command against a named reference output from the terminal.
"""

import logging
import sys

import click

from regressiontest.config import config
from regressiontest.engine import cli_exec, reference
from regressiontest.errors import RegressionTestError
from regressiontest.logging_config import configure_logging, log_call
from regressiontest.models import ExecOptions, Invocation

EXIT_FAIL = 1
EXIT_ERROR = 2


@click.group()
def cli():
    """Command-line regression checks against reference outputs"""
    configure_logging()


@cli.command('run')
@click.argument('command')
@click.argument('name')
@click.option('--input', 'inputs', multiple=True, help='Input file piped to stdin (only the first is used)')
@click.option('--ignore', help='Regex; matching lines are dropped from both outputs')
@click.option('--should-fail', is_flag=True, help='Expect a non-zero exit status')
@click.option('--timeout', type=float, help='Kill the command after this many seconds')
@click.option('--testdir', help='Reference directory (default: $REGRESSION_DIR)')
@click.option('--cwd', help='Working directory for the command')
@click.option('--record/--no-record', default=None, help='Create the reference if it is missing')
@click.option('--keep-output/--no-keep-output', default=None, help='Write the actual output as <name>.new')
@log_call
def run_cmd(command, name, inputs, ignore, should_fail, timeout, testdir, cwd, record, keep_output):
    """Run COMMAND and compare its output with reference NAME"""
    logger = logging.getLogger("regressiontest")
    invocation = Invocation(command=command, filenames=list(inputs), should_fail=should_fail, timeout=timeout)
    options = ExecOptions(
        ignore=ignore,
        should_fail=invocation.should_fail,
        timeout=invocation.timeout,
        testdir=testdir,
        cwd=cwd,
        record=record,
        keep_output=keep_output,
    )

    try:
        result = cli_exec.run(invocation.shell_command, name, options)
    except RegressionTestError as e:
        logger.error(f"run failed for {name}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if result.recorded:
        click.echo(f"{name}: reference recorded")
    if result.passed:
        click.echo(f"PASS {name} ({result.duration_ms}ms)")
        return

    click.echo(f"FAIL {result.describe()}", err=True)
    sys.exit(EXIT_FAIL)


@cli.command('accept')
@click.argument('name')
@click.option('--testdir', help='Reference directory (default: $REGRESSION_DIR)')
@log_call
def accept_cmd(name, testdir):
    """Promote the kept output NAME.new to reference NAME.ref"""
    try:
        ref_path = reference.accept(name, testdir or config.REGRESSION_DIR)
    except RegressionTestError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    click.echo(f"Updated {ref_path}")


# =============================================================================
# MAIN
# =============================================================================

if __name__ == '__main__':
    cli()

"""
CLI Exec - run a command and compare its output with a named reference.

The command runs through the shell in its own process group with stderr
merged into stdout. A timeout terminates the whole group. Structural problems
(missing reference, command that cannot start) raise; a wrong exit status,
a timeout or differing output produce a failed result.
"""

import logging
import os
import re
import signal
import subprocess
import time
from pathlib import Path
from typing import Optional, Tuple

from regressiontest.config import config
from regressiontest.engine import compare, reference
from regressiontest.errors import LaunchError, ReferenceNotFound
from regressiontest.logging_config import log_call
from regressiontest.models import ExecOptions, ExecResult

logger = logging.getLogger(__name__)

# Exit statuses /bin/sh uses when it could not start the command
_SHELL_LAUNCH_FAILURES = {
    126: 'command found but not executable',
    127: 'command not found',
}
# The shell's own message for those, e.g. "sh: 1: foo: not found"
_SHELL_DIAGNOSTIC = re.compile(r'(^|: )(.*: )?(command )?not found$|Permission denied$')


def _is_shell_diagnostic(output: str) -> bool:
    """True when the last output line is the shell reporting it could not run something."""
    lines = output.strip().splitlines()
    return bool(lines) and bool(_SHELL_DIAGNOSTIC.search(lines[-1]))


def _kill_group(proc: subprocess.Popen, sig: int) -> None:
    try:
        os.killpg(proc.pid, sig)
    except ProcessLookupError:
        pass


def _terminate(proc: subprocess.Popen) -> None:
    """SIGTERM the process group, then SIGKILL whatever is left after the grace period."""
    grace = config.REGRESSION_KILL_GRACE_SECONDS
    _kill_group(proc, signal.SIGTERM)
    try:
        proc.wait(timeout=grace)
    except subprocess.TimeoutExpired:
        pass
    # The shell may be gone while its children still hold the pipe
    _kill_group(proc, signal.SIGKILL)


def _spawn(command: str, timeout: Optional[float], cwd: Optional[str]) -> Tuple[Optional[int], str, bool]:
    """
    Run command through the shell.
    Returns (returncode, combined output, timed_out).
    """
    try:
        proc = subprocess.Popen(
            command,
            shell=True,
            executable=config.REGRESSION_SHELL,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding='utf-8',
            errors='replace',
            start_new_session=True,
        )
    except OSError as e:
        raise LaunchError(command, str(e)) from e

    with proc:
        try:
            output, _ = proc.communicate(timeout=timeout)
            return proc.returncode, output or '', False
        except subprocess.TimeoutExpired:
            logger.warning(f"Timed out after {timeout}s, terminating: {command}")
            _terminate(proc)
            try:
                output, _ = proc.communicate(timeout=config.REGRESSION_KILL_GRACE_SECONDS)
            except subprocess.TimeoutExpired:
                # A detached grandchild kept the pipe open; give up on its output
                output = ''
            return proc.returncode, output or '', True
        except BaseException:
            _kill_group(proc, signal.SIGKILL)
            raise


def run(command: str, name: str, options: Optional[ExecOptions] = None) -> ExecResult:
    """
    Run command and compare its output with reference `name`.

    Args:
        command: Shell command line, may contain its own redirections
        name: Reference name, resolved to <testdir>/<name>.ref
        options: ignore / should_fail / timeout and storage options

    Returns:
        ExecResult; `passed` is the overall verdict

    Raises:
        ReferenceNotFound: the reference is missing and record mode is off
        LaunchError: the shell could not start the command
        IgnorePatternError: the ignore pattern does not compile
    """
    options = options or ExecOptions()
    if not command or not command.strip():
        raise LaunchError(command, 'empty command')

    pattern = compare.compile_ignore(options.ignore)
    testdir = Path(options.testdir or config.REGRESSION_DIR)
    record = config.REGRESSION_RECORD if options.record is None else options.record
    keep_output = config.REGRESSION_KEEP_OUTPUT if options.keep_output is None else options.keep_output

    ref_path = reference.resolve(name, testdir)
    if not ref_path.is_file() and not record:
        raise ReferenceNotFound(name, ref_path)

    logger.info(f"Executing: {command}")
    start = time.perf_counter()
    returncode, output, timed_out = _spawn(command, options.timeout, options.cwd)
    duration_ms = int((time.perf_counter() - start) * 1000)

    result = ExecResult(
        command=command,
        name=name,
        returncode=returncode,
        output=output,
        should_fail=options.should_fail,
        timed_out=timed_out,
        duration_ms=duration_ms,
    )
    if timed_out:
        return result

    if returncode in _SHELL_LAUNCH_FAILURES and _is_shell_diagnostic(output):
        raise LaunchError(command, f"{_SHELL_LAUNCH_FAILURES[returncode]}: {output.strip()}")

    result.status_ok = (returncode != 0) == options.should_fail
    if not result.status_ok:
        logger.warning(f"{name}: exit status {returncode}, should_fail={options.should_fail}")

    if keep_output:
        reference.write_output(ref_path, output)

    if not ref_path.is_file():
        reference.record(ref_path, output)
        result.recorded = True
        result.expected = output
    else:
        result.expected = reference.load(name, ref_path)

    actual_lines = compare.filter_lines(output, pattern)
    expected_lines = compare.filter_lines(result.expected, pattern)
    result.output_ok = actual_lines == expected_lines
    if not result.output_ok:
        result.diff = compare.unified_diff(expected_lines, actual_lines, name)
        logger.warning(f"{name}: output differs from {ref_path}")
        logger.info(f"{name} diff:\n{result.diff}")

    return result


@log_call
def execute(command: str, name: str, ignore: Optional[str] = None, should_fail: bool = False,
            timeout: Optional[float] = None, **extra) -> bool:
    """
    Run command and return True when its exit status and filtered output match.

    extra accepts the remaining ExecOptions fields (testdir, cwd, record, keep_output).
    """
    options = ExecOptions(ignore=ignore, should_fail=should_fail, timeout=timeout, **extra)
    return run(command, name, options).passed

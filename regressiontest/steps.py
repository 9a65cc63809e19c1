"""
Scenario steps for command-line regression checks.

State that the steps share lives on an explicit ScenarioContext, one per
scenario. STEPS maps structured step names to their handlers so any runner
(pytest-bdd, a table-driven test, the CLI) can drive the same logic:

    ctx = ScenarioContext()
    run_steps(ctx, [
        ("input_files", "a.vcf"),
        ("execute", "myprog --summarize"),
        ("output_matches", "summary_v1"),
    ])
    assert ctx.result.passed
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from regressiontest.config import config
from regressiontest.engine import cli_exec
from regressiontest.errors import RegressionTestError
from regressiontest.models import ExecOptions, ExecResult, Invocation


@dataclass
class ScenarioContext:
    """Mutable state shared between Given/When/Then steps within a scenario."""
    filenames: List[str] = field(default_factory=list)
    command: Optional[str] = None
    workdir: Optional[str] = None
    testdir: Optional[str] = None
    output_ignore: Optional[str] = field(default_factory=lambda: config.OUTPUT_IGNORE)
    error_ignore: Optional[str] = field(default_factory=lambda: config.ERROR_IGNORE)
    result: Optional[ExecResult] = None


def have_input_files(ctx: ScenarioContext, names: str) -> None:
    """Remember a comma-separated list of input files."""
    ctx.filenames = [n.strip() for n in names.split(",") if n.strip()]


def execute_command(ctx: ScenarioContext, command: str) -> None:
    """Build the shell command, piping in the first input file if there is one."""
    ctx.command = Invocation(command=command, filenames=ctx.filenames).shell_command


def _run(ctx: ScenarioContext, name: str, options: ExecOptions) -> ExecResult:
    if not ctx.command:
        raise RegressionTestError("No command to check. Run an 'execute' step first.")
    options.testdir = ctx.testdir
    options.cwd = ctx.workdir
    ctx.result = cli_exec.run(ctx.command, name, options)
    return ctx.result


def expect_output_matches(ctx: ScenarioContext, name: str) -> ExecResult:
    return _run(ctx, name, ExecOptions(ignore=ctx.output_ignore))


def expect_error_matches(ctx: ScenarioContext, name: str, seconds: int) -> ExecResult:
    """The command must exit non-zero within `seconds` and match the reference."""
    return _run(ctx, name, ExecOptions(
        ignore=ctx.error_ignore,
        should_fail=True,
        timeout=seconds,
    ))


STEPS: Dict[str, Callable] = {
    "input_files": have_input_files,
    "execute": execute_command,
    "output_matches": expect_output_matches,
    "error_matches": expect_error_matches,
}


def run_step(ctx: ScenarioContext, step: str, *args):
    try:
        handler = STEPS[step]
    except KeyError:
        raise ValueError(f"Unknown step {step!r}. Known steps: {', '.join(sorted(STEPS))}") from None
    return handler(ctx, *args)


def run_steps(ctx: ScenarioContext, steps: Iterable[Tuple]) -> Optional[ExecResult]:
    """Run (step, *args) tuples in order. Returns the last comparison result."""
    for step, *args in steps:
        run_step(ctx, step, *args)
    return ctx.result

"""
Data Models
Dataclasses for one regression check. Transient, built per scenario.
"""

import shlex
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Invocation:
    """A command to run, optionally fed the first input file on stdin"""
    command: str = ''
    filenames: List[str] = field(default_factory=list)
    should_fail: bool = False
    timeout: Optional[float] = None

    @property
    def shell_command(self) -> str:
        if self.filenames:
            return f"{self.command} < {shlex.quote(self.filenames[0])}"
        return self.command


@dataclass
class ExecOptions:
    """Options for a single run. None for record/keep_output means: use config."""
    ignore: Optional[str] = None
    should_fail: bool = False
    timeout: Optional[float] = None
    testdir: Optional[str] = None
    cwd: Optional[str] = None
    record: Optional[bool] = None
    keep_output: Optional[bool] = None


@dataclass
class ExecResult:
    """Outcome of running a command and comparing it with its reference"""
    command: str = ''
    name: str = ''
    returncode: Optional[int] = None
    output: str = ''
    expected: str = ''
    should_fail: bool = False
    timed_out: bool = False
    status_ok: bool = False
    output_ok: bool = False
    recorded: bool = False
    diff: str = ''
    duration_ms: int = 0

    @property
    def passed(self) -> bool:
        return self.status_ok and self.output_ok and not self.timed_out

    @property
    def outcome(self) -> str:
        """One of: pass, timeout, status, mismatch."""
        if self.timed_out:
            return 'timeout'
        if not self.status_ok:
            return 'status'
        if not self.output_ok:
            return 'mismatch'
        return 'pass'

    def describe(self) -> str:
        """Human-readable failure summary, including the diff when there is one."""
        if self.outcome == 'pass':
            return f"{self.name}: output matches"
        if self.outcome == 'timeout':
            return f"{self.name}: {self.command!r} timed out"
        if self.outcome == 'status':
            wanted = 'a non-zero' if self.should_fail else 'a zero'
            return f"{self.name}: {self.command!r} exited {self.returncode}, expected {wanted} exit status"
        return f"{self.name}: output of {self.command!r} differs from reference\n{self.diff}"

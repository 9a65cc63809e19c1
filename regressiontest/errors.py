"""
Error types for regression runs.

A hard error means the test itself is broken (missing reference, command
that cannot start). A failing comparison is not an error: it is reported as
a false result.
"""


class RegressionTestError(RuntimeError):
    """Base error for regressiontest operations."""


class ReferenceNotFound(RegressionTestError):
    """The named reference output could not be resolved or read."""

    def __init__(self, name: str, path=None):
        self.name = name
        self.path = path
        message = f"Reference output '{name}' not found"
        if path is not None:
            message += f" (looked for {path})"
        super().__init__(message)


class LaunchError(RegressionTestError):
    """The command could not be started by the shell."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not launch {command!r}: {reason}")


class IgnorePatternError(RegressionTestError):
    """The ignore pattern is not a valid regular expression."""

"""
Logging configuration for regressiontest.

Everything logs under the 'regressiontest' logger tree (engine modules use
child loggers such as 'regressiontest.engine.cli_exec'), so one handler on
the parent sees commands, timeouts and diffs.

  Log file : $REGRESSION_LOG_DIR/regressiontest.log (default ./logs)
  Rotation : 5 MB × 3 backups
  Level    : LOG_LEVEL env var, INFO when unset or unknown

    2026-10-19 14:32:01 | DEBUG    | CALL execute | args=('myprog --summarize < a.vcf', 'summary_v1')
    2026-10-19 14:32:01 | INFO     | regressiontest.engine.cli_exec | Executing: myprog --summarize < a.vcf
    2026-10-19 14:32:01 | INFO     | OK   execute | result=True | 42ms
"""

import functools
import logging
import logging.handlers
import os
import time
from pathlib import Path

LOGGER_NAME = "regressiontest"
LOG_FILENAME = "regressiontest.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_CHILD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_MAX_ARG_REPR = 200  # captured outputs can be large


class _RegressionFormatter(logging.Formatter):
    """Prefix records from engine modules with their logger name."""

    def __init__(self):
        super().__init__(_FORMAT, datefmt=_DATE_FORMAT)
        self._child = logging.Formatter(_CHILD_FORMAT, datefmt=_DATE_FORMAT)

    def format(self, record):
        if record.name != LOGGER_NAME:
            return self._child.format(record)
        return super().format(record)


def log_dir() -> Path:
    return Path(os.environ.get("REGRESSION_LOG_DIR", "logs"))


def configure_logging() -> logging.Logger:
    """Attach the rotating file handler once; later calls return the same logger."""
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)

    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    handler = logging.handlers.RotatingFileHandler(
        directory / LOG_FILENAME,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(_RegressionFormatter())
    logger.addHandler(handler)
    return logger


def _short_repr(value) -> str:
    text = repr(value)
    if len(text) > _MAX_ARG_REPR:
        return text[:_MAX_ARG_REPR] + "...(truncated)"
    return text


def log_call(func):
    """
    Trace a call: CALL on entry (DEBUG), OK with timing on return (INFO),
    FAIL with the exception on error (ERROR, then re-raised). Boolean
    verdicts such as execute()'s are included in the OK line.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(LOGGER_NAME)
        name = func.__name__
        start = time.perf_counter()

        parts = [_short_repr(a) for a in args] + [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        logger.debug(f"CALL {name} | args=({', '.join(parts) or '-'})")

        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            ms = int((time.perf_counter() - start) * 1000)
            logger.error(f"FAIL {name} | {type(exc).__name__}: {exc} | {ms}ms")
            raise

        ms = int((time.perf_counter() - start) * 1000)
        verdict = f"result={result} | " if isinstance(result, bool) else ""
        logger.info(f"OK   {name} | {verdict}{ms}ms")
        return result

    return wrapper

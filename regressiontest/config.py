"""
Regression Test Configuration
Loads settings from environment variables with sensible defaults.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

_logger = logging.getLogger(__name__)

# Load .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


def _positive_seconds(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except ValueError:
        value = None
    if value is None or not value > 0:
        _logger.critical(f"{name} must be a positive number of seconds, got {raw!r}")
        raise ValueError(f"{name} must be a positive number of seconds, got {raw!r}.")
    return value


class Config:
    """Application configuration."""

    # Where named references live: <REGRESSION_DIR>/<name>.ref
    REGRESSION_DIR = os.getenv('REGRESSION_DIR', 'test/data/regression')

    # Shell used to run commands
    REGRESSION_SHELL = os.getenv('REGRESSION_SHELL', '/bin/sh')

    # Create a missing reference from the actual output instead of failing
    REGRESSION_RECORD = _env_flag('REGRESSION_RECORD')

    # Write the actual output next to the reference as <name>.new
    REGRESSION_KEEP_OUTPUT = _env_flag('REGRESSION_KEEP_OUTPUT')

    # Seconds between SIGTERM and SIGKILL when a command times out
    REGRESSION_KILL_GRACE_SECONDS = _positive_seconds('REGRESSION_KILL_GRACE_SECONDS', '0.5')

    # Step-level ignore patterns (masks headers, dates, versions, pids)
    OUTPUT_IGNORE = os.getenv('REGRESSION_OUTPUT_IGNORE', '(##BioVcf|date|"version":)')
    ERROR_IGNORE = os.getenv('REGRESSION_ERROR_IGNORE', '(FATAL|Waiting|from|vcf|Options|Final pid)')


# Singleton instance
config = Config()

"""
Reference Output Store
Named references live in a directory as <name>.ref; the last actual output
can be kept alongside as <name>.new and later accepted as the new reference.
"""

import logging
from pathlib import Path
from typing import Union

from regressiontest.errors import ReferenceNotFound, RegressionTestError

logger = logging.getLogger(__name__)

REFERENCE_SUFFIX = '.ref'
OUTPUT_SUFFIX = '.new'

PathLike = Union[str, Path]


def reference_path(name: str, testdir: PathLike) -> Path:
    return Path(testdir) / f"{name}{REFERENCE_SUFFIX}"


def resolve(name: str, testdir: PathLike) -> Path:
    """
    Map a reference name to a file.

    A name that looks like a path (has a directory part or a suffix) and
    points at an existing file is used as is; anything else resolves to
    <testdir>/<name>.ref.
    """
    candidate = Path(name)
    looks_like_path = len(candidate.parts) > 1 or bool(candidate.suffix)
    if looks_like_path and candidate.is_file():
        return candidate
    return reference_path(name, testdir)


def output_path(ref_path: Path) -> Path:
    """Where the actual output for a reference is kept."""
    return ref_path.with_suffix(OUTPUT_SUFFIX)


def load(name: str, path: Path) -> str:
    """Read a reference. Raises ReferenceNotFound when it is missing or unreadable."""
    try:
        # Decoded the same way as the command output so identical bytes compare equal
        return path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise ReferenceNotFound(name, path) from e


def record(path: Path, output: str) -> None:
    """Store output as a new reference."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(output, encoding='utf-8')
    logger.info(f"Created reference {path}")


def write_output(ref_path: Path, output: str) -> Path:
    """Keep the actual output next to the reference for inspection."""
    path = output_path(ref_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(output, encoding='utf-8')
    logger.debug(f"Wrote actual output to {path}")
    return path


def accept(name: str, testdir: PathLike) -> Path:
    """
    Promote <name>.new to <name>.ref.
    Returns the reference path.
    """
    ref_path = reference_path(name, testdir)
    new_path = output_path(ref_path)
    if not new_path.is_file():
        raise RegressionTestError(
            f"No captured output for '{name}' at {new_path}. Run with --keep-output first."
        )
    new_path.replace(ref_path)
    logger.info(f"Accepted {new_path} as reference {ref_path}")
    return ref_path

"""
Output comparison helpers.
Lines matching the ignore pattern are dropped from both sides before comparing.
"""

import difflib
import re
from typing import List, Optional

from regressiontest.errors import IgnorePatternError


def compile_ignore(ignore: Optional[str]) -> Optional[re.Pattern]:
    """Compile an ignore pattern. None or empty means nothing is ignored."""
    if not ignore:
        return None
    try:
        return re.compile(ignore)
    except re.error as e:
        raise IgnorePatternError(f"Invalid ignore pattern {ignore!r}: {e}") from e


def filter_lines(text: str, pattern: Optional[re.Pattern]) -> List[str]:
    """Split text into lines, dropping every line the pattern matches anywhere."""
    lines = text.splitlines()
    if pattern is None:
        return lines
    return [line for line in lines if not pattern.search(line)]


def unified_diff(expected: List[str], actual: List[str], name: str) -> str:
    return "\n".join(difflib.unified_diff(
        expected,
        actual,
        fromfile=f"{name} (expected)",
        tofile=f"{name} (actual)",
        lineterm="",
    ))

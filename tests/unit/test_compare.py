"""Unit tests for regressiontest/engine/compare.py."""

import re

import pytest

from regressiontest.engine.compare import compile_ignore, filter_lines, unified_diff
from regressiontest.errors import IgnorePatternError


class TestCompileIgnore:

    def test_none_means_no_pattern(self):
        assert compile_ignore(None) is None

    def test_empty_string_means_no_pattern(self):
        assert compile_ignore("") is None

    def test_compiles_valid_pattern(self):
        pattern = compile_ignore("(FATAL|Waiting)")
        assert isinstance(pattern, re.Pattern)

    def test_invalid_pattern_raises(self):
        with pytest.raises(IgnorePatternError, match="unclosed"):
            compile_ignore("(unclosed")


class TestFilterLines:

    def test_no_pattern_keeps_everything(self):
        assert filter_lines("a\nb\n", None) == ["a", "b"]

    def test_drops_matching_lines_keeping_order(self):
        pattern = compile_ignore("(##BioVcf|date)")
        text = "c\n##BioVcf 0.9\nb\nbuild date: today\na\n"
        assert filter_lines(text, pattern) == ["c", "b", "a"]

    def test_matches_anywhere_in_line(self):
        pattern = compile_ignore('"version":')
        assert filter_lines('  {"version": 1}\nkeep\n', pattern) == ["keep"]

    def test_trailing_newline_is_not_a_line(self):
        assert filter_lines("a\n", None) == filter_lines("a", None)

    def test_blank_lines_are_kept(self):
        assert filter_lines("a\n\nb\n", None) == ["a", "", "b"]

    def test_crlf_line_endings(self):
        assert filter_lines("a\r\nb\r\n", None) == ["a", "b"]


class TestUnifiedDiff:

    def test_identical_lists_give_empty_diff(self):
        assert unified_diff(["a"], ["a"], "x") == ""

    def test_marks_expected_and_actual(self):
        diff = unified_diff(["a", "b"], ["a", "c"], "summary_v1")
        assert "--- summary_v1 (expected)" in diff
        assert "+++ summary_v1 (actual)" in diff
        assert "-b" in diff
        assert "+c" in diff

"""
Unit tests for regressiontest/logging_config.py.

Covers where the log file goes, that engine child loggers end up in it,
argument truncation, and the CALL/OK/FAIL trail execute() leaves behind.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from regressiontest.engine import cli_exec
from regressiontest.errors import ReferenceNotFound
from regressiontest.logging_config import _short_repr, configure_logging, log_dir


def _clear_regressiontest_logger():
    logger = logging.getLogger("regressiontest")
    for h in logger.handlers[:]:
        h.close()
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_logger():
    _clear_regressiontest_logger()
    yield
    _clear_regressiontest_logger()


@pytest.fixture
def refdir(tmp_path):
    d = tmp_path / "regression"
    d.mkdir()
    (d / "hello.ref").write_text("hello\n")
    return d


# ---------------------------------------------------------------------------
# configure_logging
# ---------------------------------------------------------------------------

class TestConfigureLogging:

    def test_default_log_dir(self):
        env = {k: v for k, v in os.environ.items() if k != "REGRESSION_LOG_DIR"}
        with patch.dict(os.environ, env, clear=True):
            assert log_dir() == Path("logs")

    def test_log_dir_from_env(self, tmp_path):
        target = tmp_path / "build" / "logs"
        with patch.dict(os.environ, {"REGRESSION_LOG_DIR": str(target)}):
            logger = configure_logging()
        assert target.is_dir()
        assert Path(logger.handlers[0].baseFilename) == target / "regressiontest.log"

    def test_second_call_keeps_single_handler(self, tmp_path):
        with patch.dict(os.environ, {"REGRESSION_LOG_DIR": str(tmp_path)}):
            configure_logging()
            configure_logging()
        assert len(logging.getLogger("regressiontest").handlers) == 1

    def test_engine_child_logger_reaches_file(self, tmp_path):
        with patch.dict(os.environ, {"REGRESSION_LOG_DIR": str(tmp_path), "LOG_LEVEL": "INFO"}):
            logger = configure_logging()
        logging.getLogger("regressiontest.engine.cli_exec").warning("Timed out after 2s, terminating: sleep 30")
        logger.handlers[0].flush()

        text = (tmp_path / "regressiontest.log").read_text(encoding="utf-8")
        assert "regressiontest.engine.cli_exec | Timed out after 2s" in text


# ---------------------------------------------------------------------------
# Argument truncation
# ---------------------------------------------------------------------------

class TestShortRepr:

    def test_short_values_unchanged(self):
        assert _short_repr("summary_v1") == "'summary_v1'"

    def test_long_output_truncated(self):
        text = _short_repr("x" * 5000)
        assert text.endswith("...(truncated)")
        assert len(text) < 250


# ---------------------------------------------------------------------------
# execute() trail
# ---------------------------------------------------------------------------

class TestExecuteTrail:

    def _messages(self, caplog):
        return [r.getMessage() for r in caplog.records if r.name == "regressiontest"]

    def test_pass_logs_call_and_ok_with_verdict(self, caplog, refdir):
        with caplog.at_level(logging.DEBUG, logger="regressiontest"):
            assert cli_exec.execute("echo hello", "hello", testdir=str(refdir))
        messages = self._messages(caplog)
        assert any(m.startswith("CALL execute") and "'echo hello'" in m for m in messages)
        assert any(m.startswith("OK   execute | result=True") for m in messages)

    def test_mismatch_logs_false_verdict(self, caplog, refdir):
        with caplog.at_level(logging.DEBUG, logger="regressiontest"):
            assert not cli_exec.execute("echo bye", "hello", testdir=str(refdir))
        assert any("result=False" in m for m in self._messages(caplog))

    def test_missing_reference_logs_fail(self, caplog, refdir):
        with caplog.at_level(logging.DEBUG, logger="regressiontest"):
            with pytest.raises(ReferenceNotFound):
                cli_exec.execute("echo x", "missing", testdir=str(refdir), record=False)
        fail = [m for m in self._messages(caplog) if m.startswith("FAIL execute")]
        assert fail and "ReferenceNotFound" in fail[0]

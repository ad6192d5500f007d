"""
Tests for observability — logging setup and level resolution.
"""

import logging
from pathlib import Path

import pytest

from gvm.core.observability.logging_config import resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default(self):
        assert resolve_level() == "WARNING"

    def test_env(self):
        assert resolve_level(env_level="INFO") == "INFO"

    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, env_level="ERROR") == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "gvm.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG

        logging.getLogger("gvm.test").debug("pointer switched")
        for handler in root.handlers:
            handler.flush()
        assert "pointer switched" in log_file.read_text()

    def test_file_handler_creates_parent_dirs(self, tmp_path: Path):
        log_file = tmp_path / "state" / "gvm" / "gvm.log"
        setup_logging("INFO", log_file=str(log_file))
        logging.getLogger("gvm.test").info("switched")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "switched" in log_file.read_text()

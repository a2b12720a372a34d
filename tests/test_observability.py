"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from gituser.core.observability.logging_config import resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
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

    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env(self, monkeypatch):
        monkeypatch.setenv("GITUSER_LOG_LEVEL", "info")
        assert resolve_level() == "info"
        assert resolve_level(debug=True) == "DEBUG"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_hook_prefix(self):
        setup_logging("WARNING", hook=True)
        fmt = logging.getLogger().handlers[0].formatter._fmt
        assert fmt.startswith("gituser:")

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "gituser.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("gituser.test").debug("to the file only")
        for handler in root.handlers:
            handler.flush()
        assert "to the file only" in log_file.read_text()

    def test_file_from_env(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("GITUSER_LOG_FILE", str(log_file))
        setup_logging("WARNING")
        assert any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)

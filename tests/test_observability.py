"""
Tests for observability — log level resolution and handler setup.
"""

import logging
from pathlib import Path

import pytest

from src.core.observability.logging_config import (
    ENV_LOG_LEVEL,
    resolve_level,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default(self):
        assert resolve_level(environ={}) == "WARNING"

    def test_env(self):
        assert resolve_level(environ={ENV_LOG_LEVEL: "INFO"}) == "INFO"

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"debug": True, "verbose": True, "quiet": True}, "DEBUG"),
            ({"verbose": True, "quiet": True}, "INFO"),
            ({"quiet": True}, "ERROR"),
        ],
    )
    def test_flags_beat_env(self, flags, expected):
        assert resolve_level(environ={ENV_LOG_LEVEL: "CRITICAL"}, **flags) == expected


class TestSetupLogging:
    def test_console_only(self, restore_root_logger):
        setup_logging("INFO")
        root = restore_root_logger
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_unknown_level_falls_back(self, restore_root_logger):
        setup_logging("LOUD")
        assert restore_root_logger.level == logging.WARNING

    def test_file_handler_level(self, restore_root_logger, tmp_path: Path):
        log_file = tmp_path / "setup.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = restore_root_logger

        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("src.core.services.runner").debug("Running [x]: true")
        for handler in root.handlers:
            handler.flush()
        assert "Running [x]: true" in log_file.read_text()

    def test_repeated_setup_does_not_stack_handlers(self, restore_root_logger):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(restore_root_logger.handlers) == 1

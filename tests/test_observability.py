"""
Tests for observability — logging setup and level resolution.
"""

import logging
from pathlib import Path

from devstrap.core.observability.logging_config import (
    _parse_level,
    setup_logging,
    setup_logging_from_env,
)


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("INFO") == logging.INFO

    def test_unknown_falls_back_to_warning(self):
        assert _parse_level("chatty") == logging.WARNING
        assert _parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler_with_own_level(self, tmp_path: Path):
        log_file = tmp_path / "devstrap.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("devstrap.test").debug("detail for the file")
        for handler in root.handlers:
            handler.flush()
        assert "detail for the file" in log_file.read_text()


class TestSetupFromEnv:
    def test_default_is_warning(self):
        assert setup_logging_from_env({}) == "WARNING"

    def test_settings_level_used_without_env(self):
        assert setup_logging_from_env({}, default_level="info") == "INFO"
        assert logging.getLogger().level == logging.INFO

    def test_env_beats_settings(self):
        level = setup_logging_from_env({"DEVSTRAP_LOG_LEVEL": "DEBUG"}, default_level="ERROR")
        assert level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_log_file_from_env(self, tmp_path: Path):
        log_file = tmp_path / "run.log"
        setup_logging_from_env(
            {"DEVSTRAP_LOG_FILE": str(log_file), "DEVSTRAP_LOG_FILE_LEVEL": "INFO"}
        )
        logging.getLogger("devstrap.test").info("phase done")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "phase done" in log_file.read_text()

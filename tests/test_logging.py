"""Tests for log file setup."""

import logging
from logging.handlers import RotatingFileHandler

from findpeople.utils.logging import get_log_file, setup_logging


def _file_handlers():
    return [
        handler
        for handler in logging.getLogger("findpeople").handlers
        if isinstance(handler, RotatingFileHandler)
    ]


class TestSetupLogging:
    def test_log_file_in_config_dir(self, isolated_config):
        assert get_log_file() == isolated_config / "findpeople.log"

    def test_writes_to_file(self, isolated_config):
        setup_logging("DEBUG")
        logging.getLogger("findpeople.tests").debug("hello from the test")
        for handler in _file_handlers():
            handler.flush()

        assert "hello from the test" in (isolated_config / "findpeople.log").read_text()

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("FINDPEOPLE_LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger("findpeople").level == logging.WARNING

    def test_repeated_setup_replaces_handler(self):
        setup_logging("INFO")
        setup_logging("ERROR")
        handlers = _file_handlers()
        assert len(handlers) == 1
        assert handlers[0].level == logging.ERROR

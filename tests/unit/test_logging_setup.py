"""
Unit tests for server logging configuration.
"""
import logging

import pytest

from mock_api.logging_setup import setup_logging


@pytest.fixture
def werkzeug_logger():
    logger = logging.getLogger("werkzeug")
    original = logger.level
    yield logger
    logger.setLevel(original)


@pytest.mark.unit
class TestSetupLogging:

    def test_access_log_quiet_by_default(self, werkzeug_logger, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        level = setup_logging()

        assert level == logging.INFO
        assert werkzeug_logger.level == logging.WARNING

    def test_access_log_enabled(self, werkzeug_logger):
        level = setup_logging("info", access_log=True)

        assert level == logging.INFO
        assert werkzeug_logger.level == logging.INFO

    def test_debug_level_shows_access_log(self, werkzeug_logger):
        assert setup_logging("DEBUG") == logging.DEBUG
        assert werkzeug_logger.level == logging.DEBUG

    def test_level_from_env(self, werkzeug_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")

        assert setup_logging() == logging.ERROR
        assert werkzeug_logger.level == logging.WARNING

    @pytest.mark.parametrize("name", ["loud", "basicConfig"])
    def test_unknown_level_falls_back_to_info(self, werkzeug_logger, name):
        assert setup_logging(name) == logging.INFO

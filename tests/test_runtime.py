"""Tests for the runtime.py module."""
import logging
from logging.handlers import MemoryHandler
import os
from unittest import mock

import pytest

from neural_intent_simulator.core.settings import LogLevel
from neural_intent_simulator.util import runtime


@pytest.fixture
def root_logger():
    """Restore the root logger handlers after each test."""
    logger = logging.getLogger()
    handlers = list(logger.handlers)
    level = logger.level
    logger.handlers = []
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestDefaultSettingsPath:
    """Tests for locating the settings file."""

    def test_packaged_settings_are_used_by_default(self, tmp_path, monkeypatch):
        """Test that the packaged settings are used without a user file."""
        monkeypatch.setattr(runtime, "get_configs_dir", lambda: str(tmp_path))
        path = runtime.get_default_settings_path()
        assert path.endswith(os.path.join("config", "settings.yaml"))
        assert os.path.exists(path)

    def test_user_settings_take_precedence(self, tmp_path, monkeypatch):
        """Test that a settings file in the user directory is preferred."""
        monkeypatch.setattr(runtime, "get_configs_dir", lambda: str(tmp_path))
        user_settings = tmp_path / "settings.yaml"
        user_settings.write_text("version: 1.0.0\n")
        assert runtime.get_default_settings_path() == str(user_settings)


class TestLogger:
    """Tests for the logger setup."""

    def test_initialize_logger_buffers_messages(self, root_logger):
        """Test that messages are kept in memory until the logger is configured."""
        runtime.initialize_logger("test-script")
        assert any(isinstance(h, MemoryHandler) for h in root_logger.handlers)

    def test_configure_logger_drops_buffered_messages_below_level(self, root_logger):
        """Test that buffered messages below the configured level are discarded."""
        runtime.initialize_logger("test-script")
        logging.getLogger("test").debug("debug message")
        logging.getLogger("test").warning("warning message")
        memory_handler = next(
            h for h in root_logger.handlers if isinstance(h, MemoryHandler)
        )
        assert len(memory_handler.buffer) == 2
        target = mock.Mock()
        memory_handler.target = target

        runtime.configure_logger("test-script", LogLevel.INFO)
        handled = [c.args[0].getMessage() for c in target.handle.mock_calls]
        assert handled == ["warning message"]
        assert root_logger.level == logging.INFO

"""Tests for logging setup."""
import logging

from rich.logging import RichHandler

from searchchat.config import LOGGER_NAME, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_by_name(self):
        logger = configure_logging("debug")

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_unknown_level_falls_back_to_warning(self):
        assert configure_logging("chatty").level == logging.WARNING

    def test_single_rich_handler(self):
        configure_logging("info")
        configure_logging("info")

        handlers = [h for h in logging.getLogger(LOGGER_NAME).handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1

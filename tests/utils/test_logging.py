"""
Tests for logging utilities.

This module tests logging setup, log levels, and log formatting.
"""

import logging
from unittest.mock import MagicMock, patch

from countcraft.core.utils.logger import (
    LOGGER_NAME,
    get_logger,
    log_batch_complete,
    log_calculation_complete,
    log_error,
    log_info,
    log_property_write,
    reset_logging,
    setup_logging,
)


class TestLogging:
    """Tests for logging utilities."""

    def test_get_logger(self):
        """Test getting logger instance."""
        logger = get_logger()

        assert logger.name == LOGGER_NAME
        assert get_logger() is logger

    def test_setup_logging(self):
        """Test setting up logging."""
        with patch("countcraft.core.utils.logger.logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_logger.handlers = []
            mock_get_logger.return_value = mock_logger
            setup_logging(level="DEBUG")
            mock_get_logger.assert_called_with(LOGGER_NAME)
            assert mock_logger.addHandler.called
        reset_logging()

    def test_setup_replaces_handlers(self):
        """Test that repeated setup does not stack handlers."""
        setup_logging("INFO")
        logger = setup_logging("DEBUG")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_log_file(self, tmp_path):
        """Test logging to a file."""
        log_file = tmp_path / "countcraft.log"
        logger = setup_logging("INFO", log_file=str(log_file))
        log_info("batch", "started")
        for handler in logger.handlers:
            handler.flush()
        assert "[BATCH] started" in log_file.read_text(encoding="utf-8")

    def test_module_tagged_messages(self, caplog):
        """Test module prefix and context formatting."""
        get_logger()
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            log_error("vault", "write failed", "a.md")
        assert "[VAULT] write failed | Context: a.md" in caplog.text

    def test_domain_helpers_use_given_logger(self):
        """Test calculation helpers log through an injected logger."""
        logger = MagicMock()
        log_calculation_complete("a.md", {"words": 2}, failures=1, logger=logger)
        log_batch_complete(2, 3, 0.5, logger=logger)
        log_property_write("a.md", "words", 2, False, logger=logger)

        assert "(1 failed)" in logger.debug.call_args.args[0]
        assert "2/3" in logger.info.call_args.args[0]
        logger.error.assert_called_once()

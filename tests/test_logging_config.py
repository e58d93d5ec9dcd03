"""Tests for logging configuration."""

import logging

from star_rating_view.logging_config import configure_logging, get_logger


class TestLoggingConfig:
    """Tests for configure_logging and get_logger."""

    def test_configure_is_idempotent(self):
        """Test that configuring twice adds no handlers."""
        configure_logging(log_to_file=False)
        root = logging.getLogger("star_rating")
        handlers = list(root.handlers)
        configure_logging(log_to_file=False)
        assert root.handlers == handlers
        assert handlers

    def test_explicit_level(self):
        """Test that an explicit level is applied."""
        configure_logging(logging.DEBUG, log_to_file=False)
        assert logging.getLogger("star_rating").level == logging.DEBUG
        configure_logging(logging.INFO, log_to_file=False)
        assert logging.getLogger("star_rating").level == logging.INFO

    def test_level_from_environment(self, monkeypatch):
        """Test that STAR_RATING_LOG_LEVEL sets the level."""
        monkeypatch.setenv("STAR_RATING_LOG_LEVEL", "warning")
        configure_logging(log_to_file=False)
        assert logging.getLogger("star_rating").level == logging.WARNING
        configure_logging(logging.INFO, log_to_file=False)

    def test_get_logger_names(self):
        """Test logger naming under the star_rating root."""
        assert get_logger().name == "star_rating"
        assert get_logger("star_rating_view.imaging").name == "star_rating.star_rating_view.imaging"

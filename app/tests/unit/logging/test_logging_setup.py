"""Tests for langcache.logging.setup module."""

import logging

import pytest

from langcache.logging import configure_logging, get_logger, get_module_logger


@pytest.mark.unit
class TestLoggingSetup:
    """Tests for logging configuration helpers."""

    def test_configure_logging_suppresses_output_under_pytest(self):
        """Under pytest the root level is above CRITICAL."""
        configure_logging()
        assert logging.root.level > logging.CRITICAL

    def test_get_logger_binds_name(self):
        """get_logger(name) binds logger_name."""
        logger = get_logger("langcache.test")
        assert logger._context["logger_name"] == "langcache.test"

    def test_get_module_logger_binds_caller(self):
        """get_module_logger() binds the calling module."""
        logger = get_module_logger()
        assert logger._context["module_path"] == __name__
        assert logger._context["component"] == __name__.split(".")[-1]

    def test_get_logger_without_name_binds_caller(self):
        """get_logger() without a name behaves like get_module_logger()."""
        logger = get_logger()
        assert logger._context["module_path"] == __name__

    def test_logging_calls_do_not_raise(self):
        """Log calls work with suppressed output."""
        logger = get_module_logger()
        logger.info("cache_regenerated", cache_path="cache/i18n_x_L_en.py")
        logger.error("cache_write_failed", error="denied")

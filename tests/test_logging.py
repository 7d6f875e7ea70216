"""Test the centralized logging functionality."""

import logging
import os
from io import StringIO

import pytest

from slayer.logging import (
    LOG_LEVEL_ENV,
    apply_env_log_level,
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    publish_log_level,
    set_global_log_level,
)


def test_centralized_logging():
    """Test that centralized logging works properly."""
    logger = get_logger("slayer.test")
    disable_debug_logging()

    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)

    logger.handlers.clear()
    logger.addHandler(handler)

    try:
        # Info level appears by default
        logger.info("Test info message")
        assert "Test info message" in log_capture.getvalue()

        # Debug level does not
        log_capture.seek(0)
        log_capture.truncate(0)
        logger.debug("Test debug message")
        assert "Test debug message" not in log_capture.getvalue()

        enable_debug_logging()
        logger.debug("Test debug message after enable")
        assert "Test debug message after enable" in log_capture.getvalue()
    finally:
        logger.removeHandler(handler)
        disable_debug_logging()


def test_logger_naming():
    """Test that loggers use consistent naming."""
    logger = get_logger("slayer.monte_carlo.test")
    assert logger.name == "slayer.monte_carlo.test"


def test_multiple_loggers():
    """Test that multiple loggers share the root level."""
    logger1 = get_logger("slayer.module1")
    logger2 = get_logger("slayer.module2")
    assert logger1 is not logger2

    try:
        set_global_log_level(logging.WARNING)
        assert logging.getLogger("slayer").level == logging.WARNING
        assert logger1.getEffectiveLevel() == logging.WARNING
        assert logger2.getEffectiveLevel() == logging.WARNING
    finally:
        disable_debug_logging()


def test_env_log_level(monkeypatch):
    """Worker processes pick up the level published by the parent."""
    try:
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        apply_env_log_level()
        assert logging.getLogger("slayer").level == logging.DEBUG

        # Unknown names are ignored
        monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
        apply_env_log_level()
        assert logging.getLogger("slayer").level == logging.DEBUG
    finally:
        disable_debug_logging()


def test_bottleneck_search_logs_candidates(caplog, series_pair):
    """Sensitivity analysis reports each candidate at debug level."""
    from slayer.algorithms.sensitivity import find_bottleneck

    try:
        enable_debug_logging()
        with caplog.at_level(logging.DEBUG, logger="slayer"):
            find_bottleneck(series_pair)
        assert "Bottleneck candidate 'a'" in caplog.text
    finally:
        disable_debug_logging()


def test_level_names_are_accepted():
    """Levels can be given by name, case-insensitively."""
    try:
        set_global_log_level("warning")
        assert logging.getLogger("slayer").level == logging.WARNING
        with pytest.raises(ValueError, match="Unknown log level"):
            set_global_log_level("chatty")
    finally:
        disable_debug_logging()


def test_published_level_round_trips(monkeypatch):
    """The level a parent publishes is the one its workers apply."""
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    try:
        set_global_log_level(logging.WARNING)
        publish_log_level()
        assert os.environ[LOG_LEVEL_ENV] == "WARNING"

        disable_debug_logging()
        apply_env_log_level()
        assert logging.getLogger("slayer").level == logging.WARNING
    finally:
        disable_debug_logging()

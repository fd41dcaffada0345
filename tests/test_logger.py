"""Tests for the logger setup."""

import logging

from gpa_calculator.config import resolve_log_level
from gpa_calculator.logger import get_logger


def test_logger_is_configured_once():
    name = "gpa_calculator.tests"
    logging.getLogger(name).handlers = []

    first = get_logger(name)
    handler_count = len(first.handlers)
    second = get_logger(name)

    assert first is second
    assert handler_count == 1
    assert len(second.handlers) == handler_count
    assert second.propagate is False


def test_unknown_log_level_falls_back_to_warning():
    assert resolve_log_level("VERBOSE") == "WARNING"
    assert resolve_log_level("") == "WARNING"


def test_known_log_level_is_normalised():
    assert resolve_log_level(" debug ") == "DEBUG"

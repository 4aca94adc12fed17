# tests/test_logging_config.py

import logging

import pytest

from core.logging_config import LOGGER_NAME, resolve_log_level, setup_logger


@pytest.mark.parametrize("name, level", [
    ("DEBUG", logging.DEBUG),
    ("warning", logging.WARNING),
    (" error ", logging.ERROR),
    ("chatty", logging.INFO),
    ("", logging.INFO),
])
def test_resolve_log_level(name, level):
    assert resolve_log_level(name) == level


def test_setup_logger_applies_level_without_duplicate_handlers():
    logger = logging.getLogger(LOGGER_NAME)
    handlers = len(logger.handlers)

    try:
        assert setup_logger("DEBUG").level == logging.DEBUG
        assert len(logger.handlers) == handlers
    finally:
        setup_logger("INFO")

"""Tests for safescan_sdk.log."""

import logging

import pytest

from safescan_sdk.log import LOGGER_NAME, configure_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_sets_level():
    assert configure_logging("debug").level == logging.DEBUG


def test_single_handler():
    configure_logging("INFO")
    logger = configure_logging("WARNING")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_module_loggers_are_children():
    configure_logging("INFO")
    assert logging.getLogger("safescan_sdk.orchestrator").getEffectiveLevel() == logging.INFO

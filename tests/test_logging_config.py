"""Tests for centralized logging setup."""

import logging

import pytest

from src.utils.logging_config import setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger's handlers and level after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_explicit_level_wins_over_environment(root_logger, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    setup_logging(level="DEBUG")

    assert root_logger.level == logging.DEBUG
    assert logging.getLogger("src").level == logging.DEBUG


def test_environment_level_used_without_argument(root_logger, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    setup_logging()

    assert root_logger.level == logging.ERROR


def test_event_logging_stays_above_debug(root_logger):
    setup_logging(level="DEBUG")
    assert logging.getLogger("src.core.events").level == logging.INFO

"""
Tests for the engine's logging helpers.
"""

import io
import logging

import pytest
from rich.console import Console

from dungeon_combat.core import logging as engine_logging
from dungeon_combat.core.logging import (
    LOGGER_NAME,
    format_context,
    get_logger,
    log_debug,
    log_error,
    setup_logging,
)


@pytest.fixture
def engine_logger():
    """Restore the engine logger after a test installs handlers on it."""
    engine_logger = get_logger()
    handlers, level = list(engine_logger.handlers), engine_logger.level
    yield engine_logger
    engine_logger.handlers = handlers
    engine_logger.setLevel(level)


def test_format_context():
    assert format_context("Hit") == "Hit"
    assert format_context("Hit", {}) == "Hit"
    assert format_context("Hit", {"amount": 3, "side": "player"}) == (
        "Hit [amount=3 side=player]"
    )


def test_child_loggers_live_under_the_engine_logger():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("resolver").name == f"{LOGGER_NAME}.resolver"


def test_debug_messages_carry_context(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    log_debug("Counters resolved", {"player": []})
    assert "Counters resolved [player=[]]" in caplog.messages


def test_error_messages_carry_context(caplog):
    caplog.set_level(logging.ERROR, logger=LOGGER_NAME)
    log_error("floor must be an integer >= 1", {"value": 0})
    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.messages[-1] == "floor must be an integer >= 1 [value=0]"


def test_only_engine_helpers_are_exported():
    """
    Test that data-integrity warnings have a single entry point in catchery.
    """
    assert not hasattr(engine_logging, "log_warning")
    assert not hasattr(engine_logging, "log_info")


def test_debug_messages_are_filtered_by_level(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    log_debug("Turn resolved")
    assert caplog.messages == []


def test_setup_logging_replaces_its_own_handler(engine_logger):
    """
    Test that repeated setup calls keep a single rich handler.
    """
    stream = io.StringIO()
    console = Console(file=stream, width=120)

    setup_logging(logging.DEBUG, console=console)
    setup_logging(logging.WARNING, console=console)

    names = [h.get_name() for h in engine_logger.handlers]
    assert names.count(f"{LOGGER_NAME}.rich") == 1
    assert engine_logger.level == logging.WARNING

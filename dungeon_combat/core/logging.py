"""
Logging configuration module for the combat engine.

The engine logs under the ``dungeon_combat`` logger and never configures
logging on import. Callers that want the engine's trace on a terminal call
``setup_logging`` once, which attaches a rich handler to that logger only.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "dungeon_combat"


def setup_logging(level: int = logging.INFO, console: Console | None = None) -> None:
    """
    Sends the engine's log records to a rich handler.

    Calling it again replaces the handler installed by the previous call, so
    the level can be changed between battles without duplicating output.

    Args:
        level (int):
            The logging level of the engine logger. Defaults to logging.INFO.
        console (Console | None):
            The console to render to. Defaults to a 120 column console on
            standard error.
    """
    handler = RichHandler(
        console=console or Console(width=120, stderr=True, force_jupyter=False),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))
    handler.set_name(f"{LOGGER_NAME}.rich")

    engine_logger = get_logger()
    for existing in list(engine_logger.handlers):
        if existing.get_name() == handler.get_name():
            engine_logger.removeHandler(existing)
    engine_logger.addHandler(handler)
    engine_logger.setLevel(level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Gets the engine logger, or one of its children.

    Args:
        name (str | None):
            Dotted suffix under the engine logger, e.g. ``"resolver"``.

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


logger = get_logger()


def format_context(message: str, context: dict[str, Any] | None = None) -> str:
    """Appends ``key=value`` pairs to a message, e.g. ``Hit [amount=3]``."""
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{pairs}]"


def _log(level: int, message: str, context: dict[str, Any] | None) -> None:
    # Skip formatting the context of filtered records; ticks log every turn.
    if logger.isEnabledFor(level):
        logger.log(level, format_context(message, context))


def log_error(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs an error message with optional context.

    Args:
        message (str): The error message.
        context (dict[str, Any] | None): Optional context dictionary.
    """
    _log(logging.ERROR, message, context)


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    _log(logging.DEBUG, message, context)

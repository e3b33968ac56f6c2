"""Logging setup for makepot runs.

Console output follows the WP-CLI conventions the command mirrors: warnings
and errors are prefixed with their level, debug lines name the component that
emitted them, and informational lines are printed as they are.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "makepot"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger for a makepot component such as ``pipeline``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class ConsoleFormatter(logging.Formatter):
    """Render records as ``Warning: ...`` or ``Debug (component): ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            return f"Error: {message}"
        if record.levelno >= logging.WARNING:
            return f"Warning: {message}"
        if record.levelno >= logging.INFO:
            return message
        return f"Debug ({_component(record.name)}): {message}"


def _component(logger_name: str) -> str:
    prefix = f"{_LOGGER_NAME}."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix):]
    return logger_name


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send makepot records to stderr and, when given, to ``log_file``.

    The file always receives debug records so a quiet run can still be
    inspected afterwards.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(ConsoleFormatter())
    logger.addHandler(console)

    logger.setLevel(console_level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "get_logger"]

"""Tests for makepot.logging."""

from __future__ import annotations

import logging

from makepot.logging import ConsoleFormatter, configure_logging, get_logger


def _record(name: str, level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, message, None, None)


def test_console_formatter_uses_level_prefixes() -> None:
    formatter = ConsoleFormatter()

    assert formatter.format(_record("makepot.diagnostics", logging.WARNING, "Mind")) == "Warning: Mind"
    assert formatter.format(_record("makepot.catalog", logging.ERROR, "Broken")) == "Error: Broken"
    assert formatter.format(_record("makepot.metadata", logging.INFO, "Plugin file detected.")) == (
        "Plugin file detected."
    )


def test_console_formatter_names_component_of_debug_records() -> None:
    formatter = ConsoleFormatter()

    assert formatter.format(_record("makepot.pipeline", logging.DEBUG, "Scanning")) == (
        "Debug (pipeline): Scanning"
    )
    assert formatter.format(_record("elsewhere", logging.DEBUG, "x")) == "Debug (elsewhere): x"


def test_configure_logging_does_not_stack_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert get_logger("pipeline").name == "makepot.pipeline"

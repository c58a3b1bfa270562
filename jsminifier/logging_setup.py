"""Structured logging setup for jsminifier.

Provides JSON-ish or simple line formatting with module-level child loggers.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from jsminifier.config import get_config

ROOT_LOGGER_NAME = "jsminifier"


class JSONFormatter(logging.Formatter):
    """JSON-ish line formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON-ish line."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Stage/span details attached via ``extra={"extra_fields": {...}}``
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


class SimpleFormatter(logging.Formatter):
    """Simple formatter for human-readable output."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


_initialized = False


def setup_logging(level: str | None = None, format_type: str | None = None) -> None:
    """Initialize the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to config value.
        format_type: Format type ('json' or 'simple').
                     Defaults to config value.
    """
    global _initialized
    if _initialized:
        return

    config = get_config()
    level = level or config.logging.level
    format_type = format_type or config.logging.format

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    # stderr keeps minified output on stdout clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))

    if format_type == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(SimpleFormatter())

    root_logger.addHandler(console_handler)

    # Allow propagation for caplog capture in tests
    root_logger.propagate = True

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module.

    Args:
        name: Module name (will be prefixed with 'jsminifier.')

    Returns:
        Logger instance for the module.
    """
    setup_logging()

    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Reset logging state (useful for testing)."""
    global _initialized
    _initialized = False
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()

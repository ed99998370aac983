from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line written by the application logger reads ``LABEL message`` where
LABEL is one of DEBUG|INFO|WARN|ERROR|SUMMARY. Output goes to stdout so that
status messages and the final SUMMARY line share one stream.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "get_logger",
    "set_debug",
    "log_summary",
    "reset_logging",
    "setup_logging",
]

APP_LOGGER_NAME = "manifest_export"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the application logger (idempotent).

    The ``src.*`` module loggers are attached to the same handler so service
    debug output follows the labeled format too.

    Returns:
        Configured logger instance for the application
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())

    logger = logging.getLogger(APP_LOGGER_NAME)
    for name in (APP_LOGGER_NAME, "src"):
        target = logging.getLogger(name)
        target.setLevel(level)
        # Clear any existing handlers to avoid duplication
        for h in target.handlers[:]:
            target.removeHandler(h)
        target.addHandler(handler)
        target.propagate = False

    _logger = logger
    return logger


def set_debug(logger: logging.Logger) -> None:
    """Switch the application and module loggers (and their handlers) to DEBUG."""
    for name in (logger.name, "src"):
        target = logging.getLogger(name)
        target.setLevel(logging.DEBUG)
        for h in target.handlers:
            h.setLevel(logging.DEBUG)


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log ``message`` at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    if _logger is not None:
        for name in (APP_LOGGER_NAME, "src"):
            target = logging.getLogger(name)
            for h in target.handlers[:]:
                target.removeHandler(h)
    _logger = None

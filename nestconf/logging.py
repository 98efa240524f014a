"""
Logging helpers for nestconf.

The library only emits records through `get_logger`. Applications that want
them on screen call `setup_logging` or configure the "nestconf" logger
themselves.
"""

import logging
import sys
from typing import TextIO


ROOT_LOGGER_NAME = "nestconf"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[2m\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1m\033[91m",
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name of each record."""

    def __init__(self, fmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{LEVEL_COLORS.get(record.levelno, '')}{levelname}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_log_level(level_str: str) -> int:
    """Convert string log level to logging constant."""
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return levels.get(level_str.lower(), logging.INFO)


def setup_logging(level: str = "warning", use_colors: bool = True, stream: TextIO | None = None) -> logging.Logger:
    """
    Send nestconf records to a stream.

    Args:
        level: Minimum level to show
        use_colors: Color level names when the stream is a TTY
        stream: Output stream (stderr if None)

    Returns:
        The configured root logger of the package
    """
    stream = stream or sys.stderr

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(get_log_level(level))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(
        DEFAULT_FORMAT,
        use_colors=use_colors and hasattr(stream, "isatty") and stream.isatty(),
    ))
    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a component.

    Args:
        name: Component name (will be prefixed with nestconf)

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

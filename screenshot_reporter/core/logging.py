"""
Logging configuration for Screenshot Reporter.

The reporter runs inside someone else's test process, so the package logger
stays silent (NullHandler) until ``setup_logger`` is called, typically by the
CLI.
"""

import copy
import logging
import sys
from typing import Optional
from pathlib import Path

LOGGER_NAME = "screenshot_reporter"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name of report log lines."""

    # Parse fallbacks log at DEBUG, merge decisions at INFO, I/O failures at ERROR
    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[94m',
        'WARNING': '\033[93m',
        'ERROR': '\033[91m',
        'CRITICAL': '\033[95m',
        'RESET': '\033[0m',
        'BOLD': '\033[1m',
    }

    def format(self, record):
        # Works on a copy; a FileHandler on the same logger gets plain text
        record = copy.copy(record)
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        # Storage failures in bold
        if levelname in ('ERROR', 'CRITICAL'):
            record.msg = f"{self.COLORS['BOLD']}{record.msg}{self.COLORS['RESET']}"

        return super().format(record)


def verbosity_to_level(verbosity: int) -> int:
    """Map `-v` (0-3) to a level: 0 warnings only, 1-2 merge decisions, 3 header parsing."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity <= 2:
        return logging.INFO
    return logging.DEBUG


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbosity: int = 0
) -> logging.Logger:
    """
    Attach console and file handlers to the screenshot_reporter logger.

    Handlers are replaced on each call, so the CLI can call this once per
    command without duplicating output.

    Args:
        name: Logger name, the package logger by default
        level: Logging level (overrides verbosity if provided)
        log_file: Optional plain-text log file
        verbosity: Verbosity level (0=warnings, 1=merge decisions, 2=same, 3=debug)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()

    if level is None:
        level = verbosity_to_level(verbosity)
    logger.setLevel(level)

    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # stderr keeps stdout clean for `show` and `path` output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(fmt))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Logger for a reporter module; silent until setup_logger runs."""
    return logging.getLogger(name)

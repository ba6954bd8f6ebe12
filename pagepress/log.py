from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG = 15
OFF = logging.CRITICAL + 10
DEFAULT_LEVEL = "INFO"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "LOG": LOG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "OFF": OFF,
}

COLORS = {
    logging.DEBUG: "\x1b[36m",
    LOG: "\x1b[37m",
    logging.INFO: "\x1b[34m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
}
RESET = "\x1b[0m"

logging.addLevelName(LOG, "LOG")


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = COLORS.get(record.levelno, "")
        if not color:
            return message
        return f"{color}{message}{RESET}"


class StdStreamHandler(logging.StreamHandler):
    """Write to ``sys.stdout`` or ``sys.stderr`` as bound when the record is emitted."""

    def __init__(self, stream_name: str) -> None:
        logging.Handler.__init__(self)
        self.stream_name = stream_name

    @property
    def stream(self):
        return getattr(sys, self.stream_name)


class MaxLevelFilter(logging.Filter):
    """Only pass records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def resolve_level(name: Optional[str]) -> int:
    if not name:
        return LEVELS[DEFAULT_LEVEL]
    return LEVELS.get(name.strip().upper(), LEVELS[DEFAULT_LEVEL])


def create_logger(level: Optional[str] = None, name: str = "pagepress") -> logging.Logger:
    """Build the logger passed to every build step.

    ``level`` defaults to the ``DEBUG_LEVEL`` environment variable. The logger
    is not registered globally and does not propagate, so two builds in one
    process never share handlers.
    """
    if level is None:
        level = os.environ.get("DEBUG_LEVEL", DEFAULT_LEVEL)
    threshold = resolve_level(level)

    logger = logging.Logger(name, threshold)
    logger.propagate = False

    formatter = ColorFormatter("%(message)s")

    stdout_handler = StdStreamHandler("stdout")
    stdout_handler.addFilter(MaxLevelFilter(logging.WARNING))
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    stderr_handler = StdStreamHandler("stderr")
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    logger.debug(f"Creating logger with level {logging.getLevelName(threshold)}")
    return logger

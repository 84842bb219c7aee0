"""Logging setup that renders the structured ``extra`` context of each record."""

from __future__ import annotations

import logging
import logging.handlers
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

LOG_FILENAME = "fftlab.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

_LEVEL_COLORS = {
    "DEBUG": "\033[37m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


@dataclass(slots=True)
class LoggerConfig:
    """Runtime logging configuration extracted from the validated settings."""

    level: str
    directory: Path
    rotate_bytes: int
    backup_count: int


def record_context(record: logging.LogRecord) -> Dict[str, object]:
    """Return the ``extra`` fields attached to ``record``, in insertion order."""

    return {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}


class ContextFormatter(logging.Formatter):
    """Appends ``key=value`` pairs for every ``extra`` field after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


class ColorContextFormatter(ContextFormatter):
    """Console variant tinted by level."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - cosmetic
        color = _LEVEL_COLORS.get(record.levelname, "")
        return f"{color}{super().format(record)}{_RESET}"


def configure_logging(config: LoggerConfig, enable_console: bool = True) -> logging.Logger:
    """Route the root logger to a rotating ``fftlab.log`` and, optionally, the console."""

    config.directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        config.directory / LOG_FILENAME,
        maxBytes=config.rotate_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(ContextFormatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)

    if enable_console:
        console = logging.StreamHandler()
        console.setFormatter(ColorContextFormatter(LOG_FORMAT))
        root_logger.addHandler(console)

    logging.captureWarnings(True)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "LOG_FILENAME",
    "LOG_FORMAT",
    "LoggerConfig",
    "ContextFormatter",
    "configure_logging",
    "get_logger",
    "record_context",
]

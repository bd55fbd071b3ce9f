"""
Structured Logging Configuration

One line per event: timestamp, level, logger name, message, then any
monitoring context passed through ``extra`` as ``key=value`` pairs.
"""
import logging
import sys
from typing import Optional
from datetime import datetime, timezone

from acompanha.config import LOG_LEVEL, LOG_FILE

# Attributes picked up from ``extra={...}`` and appended to the line
CONTEXT_FIELDS = ("patient_id", "window_days", "reference_date", "path", "code")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class StructuredFormatter(logging.Formatter):
    """Single-line formatter; ANSI colour only when writing to a terminal."""

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def _context(self, record: logging.LogRecord) -> str:
        pairs = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        return f" | {' '.join(pairs)}" if pairs else ""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        line = (
            f"[{timestamp}] {record.levelname:8} [{record.name}] "
            f"{record.getMessage()}{self._context(record)}"
        )
        if self.use_color and record.levelname in LEVEL_COLORS:
            line = f"{LEVEL_COLORS[record.levelname]}{line}{RESET}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger for the service.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path; written without colour codes
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only replace handlers we installed ourselves
    for handler in list(root_logger.handlers):
        if getattr(handler, "_acompanha", False):
            root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    handlers[0].setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    if log_file:
        handlers.append(logging.FileHandler(log_file))
        handlers[-1].setFormatter(StructuredFormatter())

    for handler in handlers:
        handler._acompanha = True
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger (pass ``__name__``)."""
    return logging.getLogger(name)


setup_logging(LOG_LEVEL, LOG_FILE)

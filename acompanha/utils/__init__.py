"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    MonitoringError,
    CheckinDataError,
    RosterDataError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "MonitoringError",
    "CheckinDataError",
    "RosterDataError",
]

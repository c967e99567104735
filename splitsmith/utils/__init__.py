"""Utility modules for Splitsmith."""

from splitsmith.utils.logging import configure_logging, get_logger, log_error, log_warning

__all__ = [
    "get_logger",
    "log_error",
    "log_warning",
    "configure_logging",
]

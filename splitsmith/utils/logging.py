"""Centralized logging utilities for Splitsmith."""

import logging
from typing import IO, Any, Dict, Optional

# Configure default logger
_logger = logging.getLogger("splitsmith")
_logger.setLevel(logging.INFO)

# Create child loggers for different components
_loggers = {
    "store": logging.getLogger("splitsmith.store"),
    "selection": logging.getLogger("splitsmith.selection"),
    "ledger": logging.getLogger("splitsmith.ledger"),
    "scoring": logging.getLogger("splitsmith.scoring"),
    "admin": logging.getLogger("splitsmith.admin"),
    "config": logging.getLogger("splitsmith.config"),
}

# Installed by configure_logging
_handler: Optional[logging.Handler] = None


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """
    Get logger for a component.

    Args:
        component: Component name (e.g., "selection", "ledger")
                   If None, returns main splitsmith logger

    Returns:
        Logger instance
    """
    if component:
        return _loggers.get(component, _logger)
    return _logger


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log an error with context.

    Args:
        logger: Logger instance
        message: Error message
        error: Exception object
        context: Optional context dictionary
    """
    error_msg = f"{message}: {type(error).__name__}: {str(error)}"
    if context:
        error_msg += f" | Context: {context}"
    logger.error(error_msg, exc_info=True)


def log_warning(
    logger: logging.Logger,
    message: str,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """Log a warning, appending the context dictionary when given."""
    if context:
        message += f" | Context: {context}"
    logger.warning(message)


_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Set the level of all Splitsmith loggers and route them to one stream.

    Calling again replaces the handler installed by the previous call, so
    allocation and commit lines are never duplicated.

    Args:
        level: Logging level (logging.DEBUG for per-selection lines)
        stream: Destination stream (default: stderr)

    Returns:
        The installed handler
    """
    global _handler

    if _handler is not None:
        _logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream)
    _handler.setFormatter(logging.Formatter(_FORMAT))
    _logger.addHandler(_handler)

    _logger.setLevel(level)
    for logger in _loggers.values():
        logger.setLevel(level)
    return _handler

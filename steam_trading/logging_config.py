"""
Structured logging configuration for steam-trading.

Provides JSON-formatted logs with the trade offer being worked on attached
to every record emitted inside an operation.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger import jsonlogger

# Propagates through async contexts
_offer_context_var: ContextVar[Optional[dict]] = ContextVar("offer_context", default=None)


def setup_logging(level: str = "INFO", use_json: bool = True) -> logging.Logger:
    """
    Configure structured logging for the trade manager.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: If True, output JSON format; if False, use standard text format

    Returns:
        Configured root logger

    Example:
        >>> logger = setup_logging(level="INFO", use_json=True)
        >>> logger.info("offer_created", extra={"tradeoffer_id": 4242})
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stdout for container compatibility
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.addFilter(OfferContextFilter())

    if use_json:
        json_formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
        )
        console_handler.setFormatter(json_formatter)
    else:
        text_formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(text_formatter)

    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class OfferContext:
    """Context for tracing a single trade offer operation.

    Values set here are attached to every log record passing through
    OfferContextFilter while the operation runs.
    """

    @staticmethod
    def set(operation: str, tradeoffer_id: Optional[int] = None):
        """Set operation name and trade offer id for the current context."""
        _offer_context_var.set({"operation": operation, "tradeoffer_id": tradeoffer_id})

    @staticmethod
    def update(**values):
        current = dict(_offer_context_var.get() or {})
        current.update(values)
        _offer_context_var.set(current)

    @staticmethod
    def clear():
        _offer_context_var.set(None)

    @staticmethod
    def get_extra() -> dict:
        """Get extra dict for logging."""
        context = _offer_context_var.get()
        if not context:
            return {}
        return {key: value for key, value in context.items() if value is not None}


class OfferContextFilter(logging.Filter):
    """Add the current operation context to log records."""

    def filter(self, record):
        for key, value in OfferContext.get_extra().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True

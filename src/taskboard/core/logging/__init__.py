"""Logging module with structured logging and request tracking."""

from taskboard.core.logging.middleware import RequestLoggingMiddleware
from taskboard.core.logging.configure import configure_logging


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]

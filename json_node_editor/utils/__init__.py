"""Utility functions for the JSON node editor."""

from .error_handler import ErrorHandler, handle_error
from .logging_config import (
    JSONFormatter, ErrorTrackingHandler, setup_logging, setup_logging_from_config,
    log_error_with_context
)

__all__ = [
    "ErrorHandler",
    "handle_error",
    "JSONFormatter",
    "ErrorTrackingHandler",
    "setup_logging",
    "setup_logging_from_config",
    "log_error_with_context",
]

"""Logging configuration for error tracking and debugging."""

import json
import logging
import logging.handlers
import re
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config.models import LoggingConfig


_RESERVED_RECORD_FIELDS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message', 'asctime'
}


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""

        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info)
            }

        # Extra fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_FIELDS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ErrorTrackingHandler(logging.Handler):
    """Handler counting warnings and errors by logger and message pattern."""

    def __init__(self, max_recent_errors: int = 100):
        super().__init__()
        self.error_counts: Dict[str, int] = {}
        self.error_patterns: Dict[str, int] = {}
        self.recent_errors: List[Dict[str, Any]] = []
        self.max_recent_errors = max_recent_errors

    def emit(self, record: logging.LogRecord):
        """Process log record for error tracking."""

        if record.levelno < logging.WARNING:
            return

        logger_name = record.name
        self.error_counts[logger_name] = self.error_counts.get(logger_name, 0) + 1

        message_pattern = self._extract_pattern(record.getMessage())
        self.error_patterns[message_pattern] = self.error_patterns.get(message_pattern, 0) + 1

        error_info = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "logger": logger_name,
            "level": record.levelname,
            "message": record.getMessage(),
            "pattern": message_pattern
        }

        if record.exc_info:
            error_info["exception_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None

        self.recent_errors.append(error_info)

        if len(self.recent_errors) > self.max_recent_errors:
            self.recent_errors = self.recent_errors[-self.max_recent_errors:]

    def _extract_pattern(self, message: str) -> str:
        """Extract error pattern from message for grouping."""

        # Path labels and quoted values vary per node; group on the message shape
        pattern = re.sub(r'\$(\[[^\]]*\])*', '<PATH>', message)
        pattern = re.sub(r'"[^"]*"', '<STRING>', pattern)
        pattern = re.sub(r'\b\d+\b', '<NUMBER>', pattern)

        return pattern

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of tracked errors."""

        return {
            "total_errors_by_logger": dict(self.error_counts),
            "error_patterns": dict(sorted(self.error_patterns.items(),
                                          key=lambda x: x[1], reverse=True)[:10]),
            "recent_error_count": len(self.recent_errors),
            "most_recent_errors": self.recent_errors[-5:]
        }


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_json_logging: bool = False,
    enable_error_tracking: bool = True
) -> Dict[str, Any]:
    """Set up logging for the editor and return the installed tracker."""

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if enable_json_logging:
        console_formatter = JSONFormatter()
    else:
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10*1024*1024, backupCount=5, encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)

        if enable_json_logging:
            file_formatter = JSONFormatter()
        else:
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
            )

        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    error_tracker = None
    if enable_error_tracking:
        error_tracker = ErrorTrackingHandler()
        error_tracker.setLevel(logging.WARNING)
        root_logger.addHandler(error_tracker)

    logging.getLogger("json_node_editor").setLevel(numeric_level)

    return {
        "error_tracker": error_tracker,
        "log_level": log_level,
        "handlers_count": len(root_logger.handlers)
    }


def setup_logging_from_config(config: LoggingConfig) -> Dict[str, Any]:
    """Set up logging from a validated LoggingConfig."""
    return setup_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        enable_json_logging=config.enable_json_logging,
        enable_error_tracking=config.enable_error_tracking
    )


def log_error_with_context(logger: logging.Logger, error: Exception,
                           context: Dict[str, Any], operation: str):
    """Log error with context information."""

    error_info = {
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
        **context
    }

    logger.error(f"Error in {operation}: {str(error)}", extra=error_info, exc_info=error)

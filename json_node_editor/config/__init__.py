"""Configuration management for the JSON node editor."""

from .models import (
    FormattingConfig,
    LoggingConfig,
    EditorConfig
)
from .loader import (
    ConfigLoader,
    ConfigurationError,
    load_config
)

__all__ = [
    'FormattingConfig',
    'LoggingConfig',
    'EditorConfig',
    'ConfigLoader',
    'ConfigurationError',
    'load_config'
]

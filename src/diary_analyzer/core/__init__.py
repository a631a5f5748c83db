"""Core modules for Diary Analyzer.

This package contains the logging, error handling and configuration
layers shared by the parsing components.
"""

from .config_manager import AppConfig, CalendarConfig, ConfigManager, LoggingConfig, ParserConfig
from .error_handler import (
    DiaryAnalyzerError,
    ConfigurationError,
    InvalidCategoryError,
    IncompleteTimeRangeError,
    ErrorHandler,
    ErrorSeverity
)
from .logging_manager import LoggingManager

__all__ = [
    "AppConfig",
    "CalendarConfig",
    "ConfigManager",
    "LoggingConfig",
    "ParserConfig",
    "DiaryAnalyzerError",
    "ConfigurationError",
    "InvalidCategoryError",
    "IncompleteTimeRangeError",
    "ErrorHandler",
    "ErrorSeverity",
    "LoggingManager"
]

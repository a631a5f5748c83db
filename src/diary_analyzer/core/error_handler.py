"""Global Error Handling for Diary Analyzer

Exception hierarchy for the configuration and calendar layers, plus a
handler that routes errors to the log by severity. The message parsing
core itself never raises for malformed input.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DiaryAnalyzerError(Exception):
    """Base exception class for Diary Analyzer."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class ConfigurationError(DiaryAnalyzerError):
    """Error raised when configuration is invalid."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.HIGH)


class InvalidCategoryError(DiaryAnalyzerError):
    """Error raised when a category name cannot be mapped to a calendar."""

    def __init__(self, received: str, valid_options: List[str]):
        self.received = received
        self.valid_options = valid_options
        super().__init__(
            f"Invalid category: \"{received}\". Must be 'prod' (productive), "
            f"'nonprod' (non-productive), or 'admin' (routine/rest)."
        )


class IncompleteTimeRangeError(DiaryAnalyzerError):
    """Error raised when an event is built from an unresolved start or end."""
    pass


class ErrorHandler:
    """Error handler for the command line entry point."""

    def __init__(self):
        """Initialize error handler."""
        self.logger = logging.getLogger(__name__)
        self.error_callbacks: Dict[Type[Exception], Callable[[Exception], Any]] = {}

    def register_error_callback(self, exception_type: Type[Exception],
                              callback: Callable[[Exception], Any]):
        """Register a callback for specific exception types.

        Args:
            exception_type: The exception type to handle
            callback: Function to call when this exception occurs
        """
        self.error_callbacks[exception_type] = callback

    def handle_error(self, error: Exception, context: Optional[str] = None) -> ErrorSeverity:
        """Log an error at a level matching its severity and run callbacks.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Severity the error was handled with
        """
        severity = self._get_error_severity(error)
        error_message = self._format_error_message(error, context)

        self._log_error(error_message, severity)

        # Most specific registered type wins
        for error_type in type(error).__mro__:
            if error_type in self.error_callbacks:
                self.error_callbacks[error_type](error)
                break

        return severity

    def _get_error_severity(self, error: Exception) -> ErrorSeverity:
        """Determine error severity based on exception type.

        Args:
            error: The exception to analyze

        Returns:
            Appropriate severity level
        """
        if isinstance(error, DiaryAnalyzerError):
            return error.severity

        severity_map = {
            FileNotFoundError: ErrorSeverity.MEDIUM,
            PermissionError: ErrorSeverity.HIGH,
            ValueError: ErrorSeverity.MEDIUM,
            MemoryError: ErrorSeverity.CRITICAL,
            KeyboardInterrupt: ErrorSeverity.LOW,
        }

        return severity_map.get(type(error), ErrorSeverity.MEDIUM)

    def _format_error_message(self, error: Exception, context: Optional[str] = None) -> str:
        message = str(error)
        if context:
            message = f"{context}: {message}"

        return message

    def _log_error(self, message: str, severity: ErrorSeverity):
        log_methods = {
            ErrorSeverity.LOW: self.logger.info,
            ErrorSeverity.MEDIUM: self.logger.warning,
            ErrorSeverity.HIGH: self.logger.error,
            ErrorSeverity.CRITICAL: self.logger.critical,
        }

        log_methods[severity](message)

"""Centralized Logging Management for Diary Analyzer

Hands out module loggers and, when an entry point asks for it, installs
console and rotating file handlers on the root logger.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        log_message = super().format(record)
        return f"{self.COLORS.get(record.levelname, '')}{log_message}{self.COLORS['RESET']}"


class LoggingManager:
    """Centralized logging configuration and management.

    Getting a logger has no side effects. Handlers are only attached by
    :meth:`configure`, so library callers keep full control of output.
    """

    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False

    def __new__(cls) -> 'LoggingManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logging manager (only once)."""
        if self._initialized:
            return

        self.loggers: Dict[str, logging.Logger] = {}
        self.handlers: Dict[str, logging.Handler] = {}
        self._initialized = True

    def configure(self, logging_config) -> None:
        """Install handlers on the root logger from a ``LoggingConfig``.

        Args:
            logging_config: Logging section of the application config
        """
        numeric_level = self._resolve_level(logging_config.level)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Dropping handlers from a previous configure() call only
        for handler in self.handlers.values():
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()

        if logging_config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(numeric_level)
            console_handler.setFormatter(ColoredFormatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%H:%M:%S'
            ))
            root_logger.addHandler(console_handler)
            self.handlers['console'] = console_handler

        if logging_config.file_path:
            log_file = Path(logging_config.file_path)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=logging_config.max_bytes,
                backupCount=logging_config.backup_count
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            root_logger.addHandler(file_handler)
            self.handlers['file'] = file_handler

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Class method to get logger instance.

        Args:
            name: Logger name (typically __name__ of the module)

        Returns:
            Logger instance
        """
        manager = cls()
        return manager._get_logger_instance(name)

    def _get_logger_instance(self, name: str) -> logging.Logger:
        """Internal method to get logger instance."""
        if name in self.loggers:
            return self.loggers[name]

        logger = logging.getLogger(name)
        self.loggers[name] = logger
        return logger

    def set_log_level(self, level: str):
        """Set the logging level of the console handler.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        numeric_level = self._resolve_level(level)
        console_handler = self.handlers.get('console')
        if console_handler is not None:
            console_handler.setLevel(numeric_level)

    @staticmethod
    def _resolve_level(level: str) -> int:
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')
        return numeric_level

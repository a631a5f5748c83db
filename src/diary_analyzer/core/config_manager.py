"""Configuration Management for Diary Analyzer

Handles loading and validation of application configuration. Supports
hierarchical YAML files with environment variable overrides.
"""

import os
import threading
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, validator

from .error_handler import ConfigurationError


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    file_path: Optional[str] = Field(default=None)
    log_to_console: bool = Field(default=True)
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=1, le=20)

    @validator('level', pre=True)
    def normalize_level(cls, v):
        """Accept lower-case level names"""
        return v.upper() if isinstance(v, str) else v


class ParserConfig(BaseModel):
    """Configuration for message parsing."""
    # UTC-12:00 through UTC+14:00
    default_utc_offset_minutes: int = Field(default=0, ge=-720, le=840)


class CalendarConfig(BaseModel):
    """Calendar names that each category is logged to."""
    prod: str = Field(default="Actual Diary - Prod")
    nonprod: str = Field(default="Actual Diary - Nonprod")
    admin: str = Field(default="Actual Diary - Admin/Rest/Routine")
    time_zone: str = Field(default="America/Denver")

    @validator('prod', 'nonprod', 'admin')
    def validate_calendar_name(cls, v):
        """Calendar names must be non-empty"""
        if not v or not v.strip():
            raise ValueError("Calendar name must not be empty")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""
    app_name: str = Field(default="Diary Analyzer")
    environment: str = Field(default="development", pattern="^(development|testing|production)$")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)

    class Config:
        validate_assignment = True


class ConfigManager:
    """Loads configuration files in order of precedence.

    Files are read from ``config_path`` (``default_config.yaml``, then
    ``<environment>.yaml``, then ``local.yaml``), later files overriding
    earlier ones, and finally ``DIARY_<SECTION>_<KEY>`` environment
    variables. Missing files are skipped.
    """

    ENV_PREFIX = "DIARY_"

    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to configuration directory
            environment: Environment name (development, testing, production)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('DIARY_ENV', 'development')
        self._config: Optional[AppConfig] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

        self.config_files = self._get_config_files()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".diary_analyzer",
        ]

        for location in config_locations:
            if location.exists() and location.is_dir():
                return location

        return Path("config")

    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path

        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'
        }

    def load_config(self) -> AppConfig:
        """Load and validate configuration with hierarchical overrides.

        Returns:
            Validated application configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config

            config_data: Dict[str, Any] = {'environment': self.environment}

            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    file_data = self._load_yaml_file(config_file)
                    self._deep_merge(config_data, file_data)

            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)

            try:
                self._config = AppConfig(**config_data)
            except ValidationError as e:
                self.logger.error(f"Configuration validation failed: {e}")
                raise ConfigurationError(f"Invalid configuration: {e}")

            return self._config

    def reload_config(self) -> AppConfig:
        """Discard the cached configuration and load it again."""
        with self._lock:
            self._config = None
        return self.load_config()

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file.

        Returns:
            Configuration dictionary
        """
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {file_path} must be a mapping")
        return data

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.

        Environment variables follow pattern: DIARY_<SECTION>_<KEY>
        Example: DIARY_CALENDAR_TIME_ZONE -> calendar.time_zone
        """
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue

            section, sep, field_name = key[len(self.ENV_PREFIX):].lower().partition('_')
            if not sep or section not in AppConfig.model_fields:
                continue

            overrides.setdefault(section, {})[field_name] = self._convert_env_value(value)

        return overrides

    def _convert_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        """Recursively merge ``update_dict`` into ``base_dict``."""
        for key, value in update_dict.items():
            if isinstance(value, dict) and isinstance(base_dict.get(key), dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value

"""
Pytest configuration and shared fixtures for Diary Analyzer testing.
"""

import pytest
import yaml

from diary_analyzer.core.config_manager import LoggingConfig
from diary_analyzer.core.logging_manager import LoggingManager
from diary_analyzer.intelligence.request_router import RequestRouter

from .fixtures.sample_data import SAMPLE_LAST_EVENT_END, SAMPLE_NOW


@pytest.fixture
def now():
    """Fixed reference clock"""
    return SAMPLE_NOW


@pytest.fixture
def last_event_end():
    """End time of the previously logged event"""
    return SAMPLE_LAST_EVENT_END


@pytest.fixture
def router():
    """Router with a UTC default offset"""
    return RequestRouter()


@pytest.fixture
def temp_config_dir(tmp_path):
    """Temporary configuration directory with a quiet default config"""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_config = {
        "app_name": "Diary Analyzer Test",
        "logging": {
            "level": "DEBUG",
            "log_to_console": False,
        },
        "calendar": {
            "prod": "Test Prod",
            "nonprod": "Test Nonprod",
            "admin": "Test Admin",
            "time_zone": "UTC",
        },
    }

    with open(config_dir / "default_config.yaml", "w") as f:
        yaml.dump(default_config, f)

    return config_dir


@pytest.fixture
def clean_env(monkeypatch):
    """Remove DIARY_* variables so host settings cannot leak into tests"""
    import os

    for key in list(os.environ):
        if key.startswith("DIARY_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def reset_logging():
    """Drop handlers installed through LoggingManager.configure()"""
    yield
    LoggingManager().configure(LoggingConfig(log_to_console=False, file_path=None))

"""
Pytest configuration and shared fixtures.
"""

import os
import pytest


_ENV_KEYS = (
    "PORT",
    "HOST",
    "EMAIL_DATA_FILE",
    "SCHEDULER_INTERVAL_SECONDS",
    "SCHEDULER_ENABLED",
    "LOG_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True, scope="function")
def reset_environment():
    """
    Reset configuration environment variables around each test.

    Tests that need a value set it with monkeypatch or os.environ; whatever
    they leave behind is restored here.
    """
    original = {key: os.environ.get(key) for key in _ENV_KEYS}

    yield

    for key, value in original.items():
        if value is not None:
            os.environ[key] = value
        elif key in os.environ:
            del os.environ[key]

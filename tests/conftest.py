# tests/conftest.py
import pytest
from unittest.mock import MagicMock
from pathlib import Path

from drive_sample.config import Settings, get_settings


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the application settings for testing.
    This avoids the need for environment variables or a .env file during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.UPLOAD_FILE_NAME = "Desert.jpg"
    settings.CONTENT_TYPE = "image/jpeg"
    settings.FOLDER_NAME = "LIVROS"
    settings.DOWNLOAD_DIRECTORY = Path("/tmp/downloads")
    settings.CLIENT_SECRETS_FILE = Path("/tmp/client_secrets.json")
    settings.TOKEN_STORAGE_DIR = Path("/tmp/Drive.Sample")
    settings.AUTH_USER = "user"
    settings.NUM_RETRIES = 3
    settings.PAUSE_ON_EXIT = True
    settings.LOG_LEVEL = "INFO"
    settings.LOG_FILE = None
    return settings


@pytest.fixture
def mock_storage_client():
    """Fixture for a mock storage client."""
    return MagicMock()


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    This autouse fixture automatically replaces the `Settings` class constructor.
    Any part of the app code that calls `Settings()` during a test run will
    receive the `mock_settings` instance instead of a real settings object.
    """
    # The cache might hold a real instance created during test collection.
    get_settings.cache_clear()
    monkeypatch.setattr("drive_sample.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()

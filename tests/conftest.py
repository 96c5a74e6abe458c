"""Configuration for pytest."""
import pytest
from unittest.mock import Mock


@pytest.fixture
def mock_settings():
    """Mock application settings for testing."""
    settings = Mock()
    settings.app_name = "Test Scripture Reader API"
    settings.app_version = "1.0.0"
    settings.debug = True
    settings.db_name = "test_db"
    settings.db_user = "test_user"
    settings.db_password = "test_password"
    settings.db_host = "localhost"
    settings.db_port = 5432
    settings.default_version_code = "KJV"
    settings.google_client_id = "test-client-id"
    settings.google_search_api_key = "test-search-key"
    settings.google_search_engine_id = "test-engine-id"
    settings.allowed_origins = ["http://localhost:3000"]
    return settings


@pytest.fixture
def xml_dir(tmp_path):
    """An empty directory for XML fixture files."""
    directory = tmp_path / "xml"
    directory.mkdir()
    return directory

"""
Unit Test Fixtures.

Fixtures for unit tests - external dependencies are mocked.
Unit tests should be fast and isolated, never calling a real language model.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from examnotes.backend.core.config_schema import GenerationSchema, UploadsSchema
from examnotes.backend.core.exceptions import StorageError


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def generation_config() -> GenerationSchema:
    """Generation settings matching config/settings/generation.yaml."""
    return GenerationSchema(
        model="gpt-4o",
        max_tokens=4000,
        default_title="Study Notes",
        title_max_length=60,
    )


@pytest.fixture
def upload_limits() -> UploadsSchema:
    """Small upload limits so oversize cases stay cheap."""
    return UploadsSchema(max_files=3, max_file_bytes=1024)


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                # Test code that uses app config
    """
    config = MagicMock()
    config.application.name = "Test App"
    config.application.version = "1.0.0"
    config.application.api_prefix = "/api/v1"
    config.application.server.host = "127.0.0.1"
    config.application.server.port = 8000
    config.application.timeouts.external_api = 30
    config.generation.model = "test-model"
    config.storage.untitled_note_title = "Untitled Note"
    config.concurrency.thread_pool.max_workers = 2
    config.concurrency.semaphores.llm = 2
    return config


# =============================================================================
# Storage Failure Fixtures
# =============================================================================


@pytest.fixture
def failing_kv() -> MagicMock:
    """
    Key-value store whose reads and writes raise OSError.

    Usage:
        async def test_read_failure(failing_kv):
            store = NoteStore(failing_kv)
            assert await store.list_all() == []
    """
    kv = MagicMock()
    kv.get_item = AsyncMock(side_effect=OSError("disk unavailable"))
    kv.set_item = AsyncMock(side_effect=OSError("disk full"))
    kv.remove_item = AsyncMock(side_effect=OSError("disk unavailable"))
    return kv


@pytest.fixture
def read_only_kv() -> MagicMock:
    """Key-value store that reads as empty but rejects writes."""
    kv = MagicMock()
    kv.get_item = AsyncMock(return_value=None)
    kv.set_item = AsyncMock(side_effect=StorageError("read-only"))
    kv.remove_item = AsyncMock()
    return kv


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.error.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger

"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Tests run against the real project files (config/settings/*.yaml). Local
storage is redirected to an in-memory store or a tmp_path directory so no
test touches data/storage.
"""

import asyncio
from collections.abc import Generator
from typing import Any

import pytest

from examnotes.backend.core.config import get_app_config, get_settings
from examnotes.storage import factory
from examnotes.storage.kv import FileKeyValueStore, MemoryKeyValueStore
from examnotes.storage.models import Note, NoteDraft, SourceType
from examnotes.storage.notes import NoteStore


# =============================================================================
# Config Cache
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache() -> Generator[None, None, None]:
    """Clear lru_caches so each test sees a fresh config and fresh stores."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    factory.get_key_value_store.cache_clear()
    factory.get_note_store.cache_clear()
    factory.get_theme_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    factory.get_key_value_store.cache_clear()
    factory.get_note_store.cache_clear()
    factory.get_theme_store.cache_clear()


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_kv() -> MemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def file_kv(tmp_path) -> FileKeyValueStore:
    """File-backed key-value store under a temporary directory."""
    return FileKeyValueStore(tmp_path / "storage")


class YieldingKeyValueStore(MemoryKeyValueStore):
    """In-memory store that suspends on every access, like real I/O."""

    async def get_item(self, key: str) -> str | None:
        await asyncio.sleep(0)
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        await super().set_item(key, value)


@pytest.fixture
def yielding_kv() -> YieldingKeyValueStore:
    """
    Key-value store that gives up control between read and write.

    Usage:
        async def test_concurrent(yielding_kv):
            store = NoteStore(yielding_kv)
            await asyncio.gather(store.create(a), store.create(b))
    """
    return YieldingKeyValueStore()


@pytest.fixture
def note_store(memory_kv: MemoryKeyValueStore) -> NoteStore:
    """NoteStore over an empty in-memory substrate."""
    return NoteStore(memory_kv)


@pytest.fixture
def use_memory_storage(
    monkeypatch: pytest.MonkeyPatch,
    memory_kv: MemoryKeyValueStore,
) -> MemoryKeyValueStore:
    """
    Route the storage factory to an in-memory store.

    Usage:
        def test_command(use_memory_storage):
            result = runner.invoke(app, ["notes", "list"])
    """
    monkeypatch.setattr(factory, "get_key_value_store", lambda: memory_kv)
    return memory_kv


@pytest.fixture
def make_draft() -> Any:
    """Factory for NoteDraft instances."""

    def _make(
        title: str = "Photosynthesis",
        content: str = "## Key Points\n- Light energy to chemical energy",
        source_type: SourceType = SourceType.TEXT,
    ) -> NoteDraft:
        return NoteDraft(title=title, content=content, source_type=source_type)

    return _make


@pytest.fixture
def sample_note() -> Note:
    """A saved note with fixed identity and timestamp."""
    return Note(
        id="0b8f1c3e-5a7d-4e2b-9c1f-2d3e4f5a6b7c",
        title="Photosynthesis",
        content="## Key Points\n- **Chlorophyll** absorbs light\n- Produces `O2`",
        created_at="2025-01-05T09:30:00.123Z",
        source_type=SourceType.OCR,
    )

"""
Storage Factory.

Builds the configured key-value backend and the stores on top of it, from
config/settings/storage.yaml. Instances are cached per process so every
caller shares one NoteStore (and therefore one mutation lock).
"""

from functools import lru_cache

from examnotes.backend.core.config import get_app_config, resolve_project_path
from examnotes.storage.kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from examnotes.storage.notes import NoteStore
from examnotes.storage.theme import ThemePreferenceStore


@lru_cache
def get_key_value_store() -> KeyValueStore:
    """Get the configured key-value backend."""
    storage = get_app_config().storage
    if storage.backend == "memory":
        return MemoryKeyValueStore()
    return FileKeyValueStore(resolve_project_path(storage.path))


@lru_cache
def get_note_store() -> NoteStore:
    """Get the shared note store."""
    return NoteStore(get_key_value_store(), key=get_app_config().storage.notes_key)


@lru_cache
def get_theme_store() -> ThemePreferenceStore:
    """Get the shared theme preference store."""
    return ThemePreferenceStore(get_key_value_store(), key=get_app_config().storage.theme_key)

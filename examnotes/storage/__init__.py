# Local persistence package
from examnotes.storage.kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from examnotes.storage.models import (
    LoadResult,
    Note,
    NoteDraft,
    NotesLoaded,
    NotesLoadFailed,
    SourceType,
)
from examnotes.storage.notes import NoteStore
from examnotes.storage.theme import ThemeMode, ThemePreferenceStore

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "LoadResult",
    "MemoryKeyValueStore",
    "Note",
    "NoteDraft",
    "NoteStore",
    "NotesLoaded",
    "NotesLoadFailed",
    "SourceType",
    "ThemeMode",
    "ThemePreferenceStore",
]

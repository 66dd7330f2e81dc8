"""
Note Store.

Sole gateway to the saved notes. The whole collection lives under one key
as a JSON array, newest first; every mutation reads the array, changes it,
and writes it back in full.

Mutations are serialized through one asyncio.Lock per store, so
overlapping create/delete calls cannot overwrite each other's changes.
Reads take no lock: every write replaces the stored value in one step.

Failure policy:
    nothing stored -> load() returns NotesLoaded([]) (missing key or empty value)
    read failure   -> load() returns NotesLoadFailed; list_all() returns []
    write failure  -> StorageWriteError propagates; the mutation did not happen
    missing note   -> get() returns None; delete() is a no-op
"""

import asyncio
import uuid

from examnotes.backend.core.exceptions import StorageError, StorageWriteError
from examnotes.backend.core.logging import get_logger, log_with_source
from examnotes.backend.core.utils import utc_timestamp
from examnotes.storage.kv import KeyValueStore
from examnotes.storage.models import (
    NOTE_COLLECTION,
    LoadResult,
    Note,
    NoteDraft,
    NotesLoaded,
    NotesLoadFailed,
)

logger = get_logger(__name__)

DEFAULT_NOTES_KEY = "@exam_notes_saved"


class NoteStore:
    """
    Owner of the persisted note collection.

    Usage:
        store = NoteStore(FileKeyValueStore(path))
        note = await store.create(NoteDraft(title="T", content="C", source_type="text"))
        await store.get(note.id)
        await store.delete(note.id)
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_NOTES_KEY) -> None:
        self._kv = kv
        self._key = key
        self._lock = asyncio.Lock()

    @property
    def key(self) -> str:
        """Storage key holding the collection."""
        return self._key

    async def load(self) -> LoadResult:
        """
        Read the whole collection.

        Returns:
            NotesLoaded with the notes (empty if nothing was ever saved),
            or NotesLoadFailed if the stored value is unreadable or corrupt.
        """
        try:
            raw = await self._kv.get_item(self._key)
        except (OSError, ValueError, StorageError) as e:
            log_with_source(
                logger, "store", "error", "Failed to read notes",
                key=self._key, error=str(e),
            )
            return NotesLoadFailed(reason=f"Notes could not be read: {e}")

        if not raw:
            return NotesLoaded(notes=[])

        try:
            notes = NOTE_COLLECTION.validate_json(raw)
        except ValueError as e:
            log_with_source(
                logger, "store", "error", "Stored notes are corrupt",
                key=self._key, error=str(e),
            )
            return NotesLoadFailed(reason="Stored notes are corrupt")

        return NotesLoaded(notes=notes)

    async def list_all(self) -> list[Note]:
        """Return every note, newest first. Read failures yield an empty list."""
        result = await self.load()
        if isinstance(result, NotesLoadFailed):
            return []
        return result.notes

    async def get(self, note_id: str) -> Note | None:
        """Return the note with note_id, or None if there is none."""
        for note in await self.list_all():
            if note.id == note_id:
                return note
        return None

    async def create(self, draft: NoteDraft) -> Note:
        """
        Save a new note at the front of the collection.

        The note gets a fresh UUID and the current UTC time; the draft's
        title, content and source type are stored as given.

        Raises:
            StorageWriteError: The collection could not be written, or the
                existing collection is unreadable and would be lost
        """
        async with self._lock:
            notes = await self._load_for_update("create")
            note = Note(
                id=str(uuid.uuid4()),
                title=draft.title,
                content=draft.content,
                created_at=utc_timestamp(),
                source_type=draft.source_type,
            )
            await self._persist([note, *notes], "create")

        log_with_source(
            logger, "store", "info", "Note created",
            note_id=note.id, source_type=note.source_type.value,
        )
        return note

    async def delete(self, note_id: str) -> None:
        """
        Remove the note with note_id. Unknown ids are ignored.

        Raises:
            StorageWriteError: The collection could not be written or read
        """
        async with self._lock:
            notes = await self._load_for_update("delete")
            remaining = [note for note in notes if note.id != note_id]

            if len(remaining) == len(notes):
                log_with_source(
                    logger, "store", "debug", "Delete ignored, note not found",
                    note_id=note_id,
                )
                return

            await self._persist(remaining, "delete")

        log_with_source(logger, "store", "info", "Note deleted", note_id=note_id)

    async def _load_for_update(self, operation: str) -> list[Note]:
        result = await self.load()
        if isinstance(result, NotesLoadFailed):
            raise StorageWriteError(
                f"Cannot {operation} note: existing notes are unreadable ({result.reason})"
            )
        return result.notes

    async def _persist(self, notes: list[Note], operation: str) -> None:
        payload = NOTE_COLLECTION.dump_json(notes, by_alias=True).decode("utf-8")
        try:
            await self._kv.set_item(self._key, payload)
        except StorageWriteError:
            raise
        except (OSError, ValueError, StorageError) as e:
            log_with_source(
                logger, "store", "error", "Failed to write notes",
                key=self._key, operation=operation, error=str(e),
            )
            raise StorageWriteError(f"Failed to save notes: {e}") from e

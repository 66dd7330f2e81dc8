"""
Note List Projection.

Read-side view of the note collection backing `notes list` and
`notes delete`. The view is rebuilt wholesale from NoteStore.load() on every
refresh; it never edits itself optimistically.
"""

from dataclasses import dataclass
from typing import Literal

from examnotes.backend.core.logging import get_logger, log_with_source
from examnotes.cli.render import SOURCE_LABELS, format_date, preview
from examnotes.storage.models import Note, NotesLoadFailed
from examnotes.storage.notes import NoteStore

logger = get_logger(__name__)

ViewState = Literal["ready", "empty", "error"]


@dataclass(frozen=True)
class NoteListItem:
    """One display row of the list view."""

    id: str
    title: str
    date: str
    source: str
    preview: str


class NoteListProjection:
    """
    In-memory list view over a NoteStore.

    Usage:
        projection = NoteListProjection(store)
        await projection.refresh()
        if projection.state == "error":
            ...
        for item in projection.items():
            ...
    """

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self._notes: list[Note] = []
        self._error: str | None = None

    @property
    def notes(self) -> list[Note]:
        return list(self._notes)

    @property
    def error(self) -> str | None:
        """Reason the last refresh failed, or None."""
        return self._error

    @property
    def state(self) -> ViewState:
        if self._error is not None:
            return "error"
        return "ready" if self._notes else "empty"

    async def refresh(self) -> list[Note]:
        """Reload the whole collection and replace the view."""
        result = await self._store.load()

        if isinstance(result, NotesLoadFailed):
            log_with_source(
                logger, "cli", "warning", "Note list refresh failed",
                reason=result.reason,
            )
            self._notes = []
            self._error = result.reason
        else:
            self._notes = list(result.notes)
            self._error = None

        return self.notes

    async def request_delete(self, note_id: str) -> None:
        """
        Delete through the store, then refresh whatever the outcome.

        Raises:
            StorageWriteError: Propagated from the store after the refresh
        """
        try:
            await self._store.delete(note_id)
        finally:
            await self.refresh()

    def items(self) -> list[NoteListItem]:
        return [
            NoteListItem(
                id=note.id,
                title=note.title,
                date=format_date(note.created_at),
                source=SOURCE_LABELS[note.source_type],
                preview=preview(note.content),
            )
            for note in self._notes
        ]

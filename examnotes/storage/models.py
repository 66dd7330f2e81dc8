"""
Note Models.

The saved note, the draft it is created from, and the result of loading
the whole collection.

Persisted field names are camelCase (createdAt, sourceType) so stored
collections stay readable by the original mobile client.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from examnotes.backend.core.utils import parse_timestamp


class SourceType(str, Enum):
    """Where the note's material came from. Informational only."""

    OCR = "ocr"
    TEXT = "text"


class NoteDraft(BaseModel):
    """Input to NoteStore.create: everything except identity and timestamp."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    content: str
    source_type: SourceType = Field(alias="sourceType")

    @classmethod
    def from_generation(
        cls,
        title: str | None,
        content: str,
        source_type: SourceType,
        placeholder_title: str = "Untitled Note",
    ) -> "NoteDraft":
        """Build a draft from a generation reply, filling in a missing title."""
        return cls(
            title=title or placeholder_title,
            content=content,
            source_type=source_type,
        )


class Note(BaseModel):
    """A saved revision note. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    content: str
    created_at: str = Field(alias="createdAt")
    source_type: SourceType = Field(alias="sourceType")

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"

    @field_validator("created_at")
    @classmethod
    def check_created_at(cls, value: str) -> str:
        # ISO 8601 only; anything else makes the stored collection corrupt
        parse_timestamp(value)
        return value


NOTE_COLLECTION = TypeAdapter(list[Note])
"""Serializer for the persisted collection (a JSON array of notes)."""


@dataclass(frozen=True)
class NotesLoaded:
    """The collection was read; it may be empty."""

    notes: list[Note]


@dataclass(frozen=True)
class NotesLoadFailed:
    """The collection exists but could not be read or parsed."""

    reason: str


LoadResult = NotesLoaded | NotesLoadFailed

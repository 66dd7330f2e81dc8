"""
Generation Schemas.

Request/response models for the note generation endpoints.
"""

from pydantic import BaseModel, Field


class GenerateFromTextRequest(BaseModel):
    """Body of POST /generate-notes-from-text."""

    text: str | None = Field(
        default=None,
        description="Study material to convert into revision notes",
        examples=["Photosynthesis converts light energy into chemical energy..."],
    )


class GeneratedNotes(BaseModel):
    """Title and body produced from one generation call."""

    title: str = Field(description="Short note title", examples=["Photosynthesis"])
    content: str = Field(
        description="Revision notes, markdown sections and bullets",
        examples=["## Definition\n- Converts light to energy"],
    )

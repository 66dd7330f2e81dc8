# Pydantic schemas package
from examnotes.backend.schemas.base import (
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)
from examnotes.backend.schemas.generation import (
    GeneratedNotes,
    GenerateFromTextRequest,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "GeneratedNotes",
    "GenerateFromTextRequest",
    "ResponseMetadata",
]

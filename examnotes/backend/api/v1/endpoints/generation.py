"""
Note Generation Endpoints.

Pass-through to the language model: photos or text in, {title, content} out.
The caller persists the result; nothing is stored server-side.
"""

from fastapi import APIRouter, File, UploadFile

from examnotes.backend.core.dependencies import GenerationServiceDep
from examnotes.backend.schemas.generation import GeneratedNotes, GenerateFromTextRequest
from examnotes.backend.services.generation import ImageUpload

router = APIRouter()

DEFAULT_IMAGE_MEDIA_TYPE = "image/jpeg"


@router.post(
    "/generate-notes",
    response_model=GeneratedNotes,
    summary="Generate notes from images",
    description="Upload up to 25 photos of study material as multipart field `images`.",
)
async def generate_notes(
    service: GenerationServiceDep,
    images: list[UploadFile] | None = File(default=None),
) -> GeneratedNotes:
    """Generate revision notes from uploaded images."""
    uploads = [
        ImageUpload(
            data=await image.read(),
            media_type=image.content_type or DEFAULT_IMAGE_MEDIA_TYPE,
            filename=image.filename,
        )
        for image in images or []
    ]
    return await service.generate_from_images(uploads)


@router.post(
    "/generate-notes-from-text",
    response_model=GeneratedNotes,
    summary="Generate notes from text",
    description="Convert pasted study material into revision notes.",
)
async def generate_notes_from_text(
    service: GenerationServiceDep,
    body: GenerateFromTextRequest | None = None,
) -> GeneratedNotes:
    """Generate revision notes from pasted text."""
    return await service.generate_from_text(body.text if body else None)

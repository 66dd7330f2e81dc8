"""
FastAPI Dependencies.

Shared dependencies for request handling. Tests replace them through
app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends

from examnotes.backend.services.generation import GenerationService


def get_generation_service() -> GenerationService:
    """Provide the note generation service."""
    return GenerationService()


GenerationServiceDep = Annotated[GenerationService, Depends(get_generation_service)]

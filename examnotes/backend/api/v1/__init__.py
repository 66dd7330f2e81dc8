"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from examnotes.backend.api.v1.endpoints import generation

router = APIRouter()

router.include_router(generation.router, tags=["generation"])

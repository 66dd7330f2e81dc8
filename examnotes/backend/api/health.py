"""
Health Check Endpoints.

- /health: Liveness check (process running)
- /health/ready: Readiness check (language model credentials configured)
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from examnotes.backend.core.logging import get_logger
from examnotes.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


def check_llm() -> dict[str, Any]:
    """Report whether the generation model can be reached with configured credentials."""
    from examnotes.backend.core.config import get_app_config, get_settings

    if not get_settings().openai_api_key:
        return {"status": "unhealthy", "error": "OPENAI_API_KEY is not configured"}

    return {"status": "healthy", "model": get_app_config().generation.model}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check. Always 200 while the process is up."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 when the generation endpoints cannot work.
    """
    checks = {"llm": check_llm()}

    unhealthy_checks = [
        name for name, check in checks.items()
        if check.get("status") == "unhealthy"
    ]

    if unhealthy_checks:
        logger.warning(
            "Readiness check failed",
            extra={"unhealthy": unhealthy_checks},
        )
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

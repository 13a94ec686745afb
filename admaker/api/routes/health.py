"""
Health check endpoints.
"""
from fastapi import APIRouter, status

from admaker import __version__
from admaker.config import config

from ..schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health Check",
    description="Check API status and which providers have credentials.",
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.
    Providers are not contacted; a missing key only marks the service degraded.
    """
    providers = config.providers
    overall_status = "healthy" if (providers.has_replicate and providers.has_elevenlabs) else "degraded"

    return HealthResponse(
        status=overall_status,
        service="admaker-api",
        version=__version__,
        replicate_configured=providers.has_replicate,
        elevenlabs_configured=providers.has_elevenlabs,
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness Check",
)
async def liveness() -> dict:
    """Liveness check - always returns OK if app is running."""
    return {"status": "alive"}


@router.get(
    "/health/config",
    status_code=status.HTTP_200_OK,
    summary="Configuration Status",
    description="Check API key configuration status (does not expose actual keys).",
)
async def config_status() -> dict:
    """Which capabilities are usable with the configured keys."""
    validation = config.validate()

    return {
        "status": "configured" if all(validation["providers"].values()) else "partial",
        "apis": {
            "replicate": "configured" if validation["providers"]["replicate_configured"] else "missing",
            "elevenlabs": "configured" if validation["providers"]["elevenlabs_configured"] else "missing",
        },
        "capabilities": {
            "images": validation["ready_for_images"],
            "video": validation["ready_for_video"],
            "voice": validation["ready_for_voice"],
        },
    }

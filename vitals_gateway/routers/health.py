"""
Health check endpoint for the FastAPI gateway.

Reports gateway status and provider configuration without calling the provider.
"""
from fastapi import APIRouter, Request
from loguru import logger

from vitals_gateway import __version__
from vitals_gateway.models import HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Check the health status of the gateway.

    Returns:
        HealthCheckResponse with gateway status and provider configuration
    """
    logger.debug("Health check requested")

    settings = request.app.state.settings
    api_key_configured = settings.api_key is not None

    response = HealthCheckResponse(
        status="healthy",
        provider=settings.provider,
        model=settings.model,
        api_key_configured=api_key_configured,
        version=__version__
    )

    logger.info(
        f"Health check complete: gateway=healthy, provider={settings.provider}, "
        f"api_key_configured={api_key_configured}"
    )
    return response

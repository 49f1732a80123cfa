"""
Health check endpoints.

Provides an endpoint for monitoring application health. Mounted both at
``/health`` and ``/api/health``.
"""

from datetime import datetime

from fastapi import APIRouter, Request

from shared.models import ApiModel

router = APIRouter()


class HealthResponse(ApiModel):
    """Health check response model."""

    success: bool = True
    message: str = "Server is running"
    version: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running. Not rate limited.
    """
    container = request.app.state.container
    return HealthResponse(version=container.settings.app_version, timestamp=container.now())

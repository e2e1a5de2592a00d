"""Health check endpoints."""

from fastapi import APIRouter, Request

from src.config import get_settings


router = APIRouter(prefix="/health", tags=["health"])

# Services the lifespan wires onto app.state
REQUIRED_SERVICES = ("post_service", "comment_service", "notification_service")


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness probe - checks if the application is running."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness(request: Request) -> dict[str, str | bool | dict[str, bool]]:
    """Readiness probe - reports which services are wired.

    The app keeps serving without Cassandra, so this reports "degraded"
    rather than failing when services are missing.
    """
    settings = get_settings()
    services = {
        name: getattr(request.app.state, name, None) is not None
        for name in REQUIRED_SERVICES
    }
    return {
        "status": "ready" if all(services.values()) else "degraded",
        "environment": settings.environment,
        "debug": settings.debug,
        "services": services,
    }


@router.get("")
async def health() -> dict[str, str]:
    """General health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }

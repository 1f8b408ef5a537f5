"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from modules.routing import get_route_table
from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    routes: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the data service is configured and whether the route
    table passes its consistency check.
    """
    settings = get_settings()
    database = "configured" if settings.supabase_url else "not configured"
    problems = get_route_table().check_consistency()
    routes = "consistent" if not problems else f"{len(problems)} problem(s)"
    status = "ready" if database == "configured" and not problems else "degraded"
    return ReadinessResponse(status=status, database=database, routes=routes)

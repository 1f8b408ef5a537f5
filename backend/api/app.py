"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings as get_app_settings
from shared.exceptions import ExternalServiceError, NotFoundError, PortalError, ValidationError

from .config import get_settings
from .routes import health, navigation, users
from modules.app_settings.routes import router as settings_router
from modules.routing.routes import router as routes_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting TPC Portal API on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info("Shutting down TPC Portal API")


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    """Map domain errors to HTTP responses."""
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, ValidationError):
        status_code = 422
    elif isinstance(exc, ExternalServiceError):
        logger.warning(f"{exc.code}: {exc.message}")
        status_code = 503
    else:
        status_code = 500
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="TPC Portal API",
        description="Navigation and access-control resolution for the TPC portal",
        version=get_app_settings().app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(PortalError, portal_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(navigation.router, prefix="/api/navigation", tags=["navigation"])
    app.include_router(settings_router, prefix="/api/settings", tags=["settings"])
    app.include_router(routes_router, prefix="/api/routes", tags=["routes"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()

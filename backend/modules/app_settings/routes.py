"""
Public settings API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_settings_provider
from api.models.navigation import PublicSettingsResponse

from .interfaces import ISettingsProvider

router = APIRouter()


@router.get("/public", response_model=PublicSettingsResponse)
async def get_public_settings(
    provider: ISettingsProvider = Depends(get_settings_provider),
) -> PublicSettingsResponse:
    """
    Get the maintenance flag and message.

    A failed lookup surfaces as 503 through the app's error handler.
    """
    settings = await provider.get_app_settings()
    return PublicSettingsResponse(
        maintenance_mode=settings.maintenance_mode,
        maintenance_message=settings.maintenance_message,
    )

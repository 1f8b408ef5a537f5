"""
App settings module interface.
"""

from typing import Protocol, runtime_checkable

from .models import AppSettings


@runtime_checkable
class ISettingsProvider(Protocol):
    """Source of public app settings."""

    async def get_app_settings(self) -> AppSettings:
        """
        Get the public app settings.

        Raises:
            SettingsFetchError: If the settings cannot be read
        """
        ...

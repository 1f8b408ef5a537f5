"""
App settings module.

Supplies the process-wide maintenance flag and message.

Public API:
- ISettingsProvider: interface
- AppSettings: settings model
- StaticSettingsProvider, SupabaseSettingsProvider
- SettingsFetchError
"""

from .interfaces import ISettingsProvider
from .models import AppSettings
from .service import (
    StaticSettingsProvider,
    SupabaseSettingsProvider,
    get_settings_provider,
    reset_settings_provider,
)
from .exceptions import SettingsFetchError

__all__ = [
    "ISettingsProvider",
    "AppSettings",
    "StaticSettingsProvider",
    "SupabaseSettingsProvider",
    "get_settings_provider",
    "reset_settings_provider",
    "SettingsFetchError",
]

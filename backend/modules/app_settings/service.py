"""
Settings provider implementations.

SupabaseSettingsProvider reads the `get_app_settings` database function,
falling back to the public rows of the `app_settings` table when the
function is missing. Results are cached for the process and concurrent
callers share one in-flight request.
"""

import asyncio
import logging
from typing import Any, Optional

from supabase import Client

from shared.database import get_supabase_anon_client

from .interfaces import ISettingsProvider
from .models import AppSettings
from .exceptions import SettingsFetchError

logger = logging.getLogger(__name__)


def _is_missing_function(error: Exception) -> bool:
    message = str(error).lower()
    return "404" in message or "not found" in message or "function" in message


def _rows_to_values(rows: Any) -> dict[str, Any]:
    if isinstance(rows, dict):
        return rows
    return {row["key"]: row.get("value") for row in rows or [] if "key" in row}


class StaticSettingsProvider(ISettingsProvider):
    """Fixed settings, for tests and local development."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or AppSettings()

    async def get_app_settings(self) -> AppSettings:
        return self.settings


class SupabaseSettingsProvider(ISettingsProvider):
    """Settings read from Supabase, cached per process."""

    def __init__(self, client: Client):
        self._db = client
        self._cache: Optional[AppSettings] = None
        self._inflight: Optional[asyncio.Task] = None

    async def get_app_settings(self) -> AppSettings:
        if self._cache is not None:
            return self._cache

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._fetch())
        task = self._inflight
        try:
            self._cache = await task
        finally:
            if self._inflight is task:
                self._inflight = None
        return self._cache

    def reset_cache(self) -> None:
        """Drop cached settings (e.g. after an admin changed them)."""
        self._cache = None
        self._inflight = None

    async def _fetch(self) -> AppSettings:
        try:
            result = self._db.rpc("get_app_settings").execute()
            return AppSettings.from_values(_rows_to_values(result.data))
        except Exception as e:
            if not _is_missing_function(e):
                raise SettingsFetchError(str(e)) from e
            logger.warning("get_app_settings function missing, reading app_settings table")

        try:
            result = (
                self._db.table("app_settings")
                .select("key,value,is_public")
                .eq("is_public", True)
                .execute()
            )
        except Exception as e:
            raise SettingsFetchError(str(e)) from e
        return AppSettings.from_values(_rows_to_values(result.data))


# Module-level instance getter
_provider_instance: Optional[ISettingsProvider] = None


def get_settings_provider() -> ISettingsProvider:
    """Get the settings provider singleton."""
    global _provider_instance
    if _provider_instance is None:
        _provider_instance = SupabaseSettingsProvider(get_supabase_anon_client())
    return _provider_instance


def reset_settings_provider() -> None:
    """Reset the settings provider singleton (for testing)."""
    global _provider_instance
    _provider_instance = None

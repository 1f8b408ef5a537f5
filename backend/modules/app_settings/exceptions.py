"""
App settings module exceptions.
"""

from shared.exceptions import DataFetchFailedError


class SettingsFetchError(DataFetchFailedError):
    """Raised when app settings cannot be read from any source."""

    def __init__(self, message: str = "Failed to fetch app settings"):
        super().__init__(message, service="supabase", code="SETTINGS_FETCH_FAILED")

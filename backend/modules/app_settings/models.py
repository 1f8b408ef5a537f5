"""
App settings data models.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field

_TRUE_VALUES = {"true", "1", "yes", "on"}


class AppSettings(BaseModel):
    """Public, process-wide settings read once at startup."""

    maintenance_mode: bool = Field(default=False, description="Whether the site is in maintenance")
    maintenance_message: Optional[str] = Field(None, description="Message shown on the maintenance view")

    model_config = {"frozen": True}

    @classmethod
    def from_values(cls, values: dict[str, Any]) -> "AppSettings":
        """
        Build settings from a key/value mapping.

        The settings table stores everything as text, so booleans arrive
        as "true"/"false".
        """
        raw_mode = values.get("maintenance_mode", False)
        if isinstance(raw_mode, str):
            maintenance_mode = raw_mode.strip().lower() in _TRUE_VALUES
        else:
            maintenance_mode = bool(raw_mode)

        message = values.get("maintenance_message")
        return cls(
            maintenance_mode=maintenance_mode,
            maintenance_message=str(message) if message else None,
        )

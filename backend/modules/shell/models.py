"""
Shell (chrome) models.
"""

from enum import Enum
from pydantic import BaseModel, Field


class ShellKind(str, Enum):
    """Which chrome wraps the page."""

    STANDARD = "standard"
    AUTH = "auth"
    MAINTENANCE = "maintenance"  # No chrome at all
    ERROR = "error"              # Error boundary: reload prompt only


class NavItem(BaseModel):
    """One navigation link. `label_key` is a translation key."""

    key: str
    label_key: str
    href: str = Field(..., description="Canonical path")
    active: bool = False

    model_config = {"frozen": True}


class ShellLayout(BaseModel):
    """The chrome around the gated page."""

    kind: ShellKind
    banner: bool = False
    header: bool = False
    language_switch: bool = False
    footer: bool = False
    toast_host: bool = False
    bottom_nav: bool = False
    safe_area_spacer: bool = False
    nav_items: tuple[NavItem, ...] = ()
    bottom_nav_items: tuple[NavItem, ...] = ()

    model_config = {"frozen": True}

    @property
    def active_item(self) -> str | None:
        for item in self.nav_items:
            if item.active:
                return item.key
        return None

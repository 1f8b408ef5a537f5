"""
Shell module.

Assembles header, footer, bottom navigation and toast host around the
gated page, suppressing chrome for auth, admin and maintenance views.
"""

from .models import ShellKind, NavItem, ShellLayout
from .composer import ShellComposer, HEADER_ITEMS, BOTTOM_NAV_ITEMS

__all__ = [
    "ShellKind",
    "NavItem",
    "ShellLayout",
    "ShellComposer",
    "HEADER_ITEMS",
    "BOTTOM_NAV_ITEMS",
]

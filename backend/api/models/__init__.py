"""API models package."""

from .user import TokenPayload
from .navigation import (
    RouteInfo,
    ResolveResponse,
    RouteListItem,
    RouteListResponse,
    PublicSettingsResponse,
)

__all__ = [
    "TokenPayload",
    "RouteInfo",
    "ResolveResponse",
    "RouteListItem",
    "RouteListResponse",
    "PublicSettingsResponse",
]

"""
Response models for the navigation endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field

from modules.access import GateDecision
from modules.i18n import Language
from modules.shell import ShellLayout


class RouteInfo(BaseModel):
    """The route a path dispatched to."""

    name: str
    pattern: str
    page: str
    params: dict[str, str] = Field(default_factory=dict)
    fallback: bool = Field(False, description="True on a soft 404 to the home page")
    auth_page: bool = False
    gates: list[str] = Field(default_factory=list)


class ResolveResponse(BaseModel):
    """Everything a client needs to draw a URL."""

    path: str = Field(..., description="The URL as requested")
    canonical_path: str = Field(..., description="Canonical path, with query and fragment")
    redirect: bool = Field(..., description="True when the client should replace its URL")
    language: Language
    route: RouteInfo
    decision: GateDecision
    shell: ShellLayout


class RouteListItem(BaseModel):
    """One entry of the route table listing."""

    name: str
    pattern: str
    tier: str
    page: str
    auth_page: bool
    gates: list[str]


class RouteListResponse(BaseModel):
    routes: list[RouteListItem]
    total: int


class PublicSettingsResponse(BaseModel):
    """Maintenance flag as shown to anonymous clients."""

    maintenance_mode: bool
    maintenance_message: Optional[str] = None

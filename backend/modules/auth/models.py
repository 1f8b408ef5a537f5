"""
Authentication module data models.

These models define the session and profile data supplied by the
Session/Profile Provider and read by the authorization gates.
"""

from typing import Optional
from pydantic import BaseModel, Field


class SessionUser(BaseModel):
    """
    The user behind a present session.

    `email_verified` is None when the session source does not say; the
    gates then fall back to the profile.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")
    email_verified: Optional[bool] = Field(None, description="Whether the email is confirmed")

    model_config = {"frozen": True}


class Profile(BaseModel):
    """
    Member profile row.

    Only the fields needed for gating are modeled; everything else on the
    profile belongs to the pages that edit it.
    """

    id: str = Field(..., description="User ID (UUID)")
    role: Optional[str] = Field(None, description="Role name, compared case-insensitively")
    email_verified: bool = Field(default=False, description="Verified flag mirrored on the profile")

    # Required fields for profile completeness
    full_name: Optional[str] = None
    phone: Optional[str] = None
    telegram: Optional[str] = None
    city: Optional[str] = None

    # Server-computed completeness flag, when the backend provides one
    required_fields_complete: Optional[bool] = None

    model_config = {"frozen": True, "extra": "ignore"}


# Fields that must be non-blank for a profile to count as complete
REQUIRED_PROFILE_FIELDS: tuple[str, ...] = ("full_name", "phone", "telegram", "city")

"""
User models for authentication.

The authenticated user itself lives in shared.models; this is the raw
JWT claim set it is built from.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class TokenPayload(BaseModel):
    """Supabase JWT payload structure."""

    model_config = ConfigDict(extra="ignore")

    sub: str  # User ID
    email: Optional[str] = None
    email_confirmed_at: Optional[str] = None
    role: Optional[str] = None  # Postgres role, e.g. "authenticated"
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp

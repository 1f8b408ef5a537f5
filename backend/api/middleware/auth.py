"""
Bearer-token authentication for the portal API.

Supabase issues HS256 JWTs signed with the project's JWT secret. The
navigation endpoints accept anonymous requests: a missing or unusable
token there simply means "no session", and the gate chain answers
needs-login. Only `/api/users/me` insists on a valid token.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shared.models import AuthenticatedUser

from ..config import get_settings
from ..models.user import TokenPayload

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """401 with a Bearer challenge."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str) -> TokenPayload:
    """
    Verify a Supabase access token and return its claims.

    Raises:
        AuthError: If no secret is configured, or the token is expired,
            badly signed, or issued for another audience
    """
    settings = get_settings()
    if not settings.supabase_jwt_secret:
        raise AuthError("Server authentication not configured")

    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except JWTError as e:
        raise AuthError(f"Invalid token: {e}")
    return TokenPayload(**claims)


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    """
    Build the request user.

    `email_verified` is None when the token omits `email_confirmed_at`,
    and False when the claim is present but null.
    """
    verified = None
    if "email_confirmed_at" in payload.model_fields_set:
        verified = payload.email_confirmed_at is not None
    return AuthenticatedUser(
        id=payload.sub,
        email=payload.email or None,
        email_verified=verified,
        last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """Dependency for endpoints that need a signed-in user."""
    if credentials is None:
        raise AuthError("Missing authorization header")
    return get_user_from_payload(decode_token(credentials.credentials))


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[AuthenticatedUser]:
    """
    Dependency for endpoints that work with or without a session.

    An invalid or expired token counts as anonymous instead of a 401.
    """
    if credentials is None:
        return None
    try:
        return get_user_from_payload(decode_token(credentials.credentials))
    except AuthError as e:
        logger.debug(f"Ignoring bearer token: {e.detail}")
        return None

"""
User-related endpoints.

Reports what the gate chain knows about the signed-in user.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth import TokenSessionProvider, compute_profile_completeness
from modules.auth.interfaces import IAdminAllowList
from modules.auth.repository import ProfileRepository
from shared.models import AuthenticatedUser

from ..dependencies import get_allow_list, get_profile_repository
from ..middleware.auth import get_current_user

router = APIRouter()


class UserAccessResponse(BaseModel):
    """Access-relevant facts about the current user."""

    id: str
    email: Optional[str] = None
    email_verified: bool
    role: Optional[str] = None
    profile_complete: bool
    admin: bool


@router.get("/me", response_model=UserAccessResponse)
async def get_current_user_access(
    user: AuthenticatedUser = Depends(get_current_user),
    repository: ProfileRepository = Depends(get_profile_repository),
    allow_list: IAdminAllowList = Depends(get_allow_list),
) -> UserAccessResponse:
    """
    Get the current user's access state.

    Requires authentication. Lookup failures surface as 503.
    """
    profile = await TokenSessionProvider(user, repository).get_profile(user.id)
    verified = user.email_verified
    if verified is None:
        verified = profile is not None and profile.email_verified
    return UserAccessResponse(
        id=user.id,
        email=user.email,
        email_verified=verified,
        role=profile.role if profile else None,
        profile_complete=compute_profile_completeness(profile),
        admin=await allow_list.is_admin(user.id),
    )

"""
Authentication module.

Session/Profile Provider and admin allow-list consumed by the
authorization gates.

Public API:
- ISessionProvider, IAdminAllowList: interfaces
- SessionUser, Profile: session and profile models
- compute_profile_completeness: required-field completeness helper
- Provider implementations (Supabase, in-memory, token)
- Auth exceptions: SessionFetchError, ProfileFetchError, AdminCheckError
"""

from .interfaces import ISessionProvider, IAdminAllowList, SessionListener
from .models import SessionUser, Profile, REQUIRED_PROFILE_FIELDS
from .service import (
    compute_profile_completeness,
    InMemorySessionProvider,
    SupabaseSessionProvider,
    TokenSessionProvider,
    get_session_provider,
    reset_session_provider,
)
from .admin import (
    StaticAdminAllowList,
    SupabaseAdminAllowList,
    get_admin_allow_list,
    reset_admin_allow_list,
)
from .exceptions import SessionFetchError, ProfileFetchError, AdminCheckError

__all__ = [
    # Interfaces
    "ISessionProvider",
    "IAdminAllowList",
    "SessionListener",
    # Models
    "SessionUser",
    "Profile",
    "REQUIRED_PROFILE_FIELDS",
    # Providers
    "compute_profile_completeness",
    "InMemorySessionProvider",
    "SupabaseSessionProvider",
    "TokenSessionProvider",
    "get_session_provider",
    "reset_session_provider",
    "StaticAdminAllowList",
    "SupabaseAdminAllowList",
    "get_admin_allow_list",
    "reset_admin_allow_list",
    # Exceptions
    "SessionFetchError",
    "ProfileFetchError",
    "AdminCheckError",
]

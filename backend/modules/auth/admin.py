"""
Admin allow-list.

Admin console access needs both an admin role and a place on a
maintained allow-list. The list is checked server-side; the client
only asks.
"""

import logging
from typing import Iterable, Optional

from supabase import Client

from shared.config import get_settings
from shared.database import get_supabase_client

from .interfaces import IAdminAllowList
from .exceptions import AdminCheckError

logger = logging.getLogger(__name__)


class StaticAdminAllowList(IAdminAllowList):
    """Allow-list from configuration (ADMIN_USER_IDS)."""

    def __init__(self, user_ids: Iterable[str]):
        self._user_ids = frozenset(user_ids)

    async def is_admin(self, user_id: str) -> bool:
        return bool(user_id) and user_id in self._user_ids


class SupabaseAdminAllowList(IAdminAllowList):
    """Allow-list checked by the `is_admin` database function."""

    def __init__(self, client: Client):
        self._db = client

    async def is_admin(self, user_id: str) -> bool:
        if not user_id:
            return False
        try:
            result = self._db.rpc("is_admin", {"p_user_id": user_id}).execute()
        except Exception as e:
            raise AdminCheckError(user_id, str(e)) from e

        allowed = result.data is True
        if not allowed:
            logger.debug(f"User {user_id} is not on the admin allow-list")
        return allowed


# Module-level instance getter
_allow_list_instance: Optional[IAdminAllowList] = None


def get_admin_allow_list() -> IAdminAllowList:
    """
    Get the admin allow-list singleton.

    Uses the configured ADMIN_USER_IDS when set, otherwise asks Supabase.
    """
    global _allow_list_instance
    if _allow_list_instance is None:
        settings = get_settings()
        if settings.admin_user_ids:
            _allow_list_instance = StaticAdminAllowList(settings.admin_user_ids)
        else:
            _allow_list_instance = SupabaseAdminAllowList(get_supabase_client())
    return _allow_list_instance


def reset_admin_allow_list() -> None:
    """Reset the admin allow-list singleton (for testing)."""
    global _allow_list_instance
    _allow_list_instance = None

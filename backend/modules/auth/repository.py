"""
Profile repository for database access.

Encapsulates the Supabase queries against the `profiles` table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Profile

PROFILE_COLUMNS = "id, role, email_verified, full_name, phone, telegram, city, profile_required_completed"


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for profile reads.

    Note: This repository does NOT perform authorization checks.
    """

    table = "profiles"

    def get_profile_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Get a profile by user ID.

        Returns:
            Profile, or None if the row does not exist (yet).
        """
        row = self._select_one(PROFILE_COLUMNS, id=user_id)
        return self._map_to_profile(row) if row else None

    def _map_to_profile(self, row: dict[str, Any]) -> Profile:
        return Profile(
            id=row["id"],
            role=row.get("role"),
            email_verified=bool(row.get("email_verified")),
            full_name=row.get("full_name"),
            phone=row.get("phone"),
            telegram=row.get("telegram"),
            city=row.get("city"),
            required_fields_complete=row.get("profile_required_completed"),
        )

"""
Base repository for Supabase-backed reads.

The portal only reads through repositories; writes happen in the pages
that own the data.
"""

from typing import Any, Generic, Optional, TypeVar

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for table readers.

    Subclasses set `table` and map rows to their model:

        class ProfileRepository(BaseRepository[Profile]):
            table = "profiles"

            def get_profile_by_id(self, user_id: str) -> Optional[Profile]:
                row = self._select_one(PROFILE_COLUMNS, id=user_id)
                return self._map_to_profile(row) if row else None
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        self._db = db

    def _select_one(self, columns: str = "*", **filters: Any) -> Optional[dict[str, Any]]:
        """First row matching every equality filter, or None."""
        query = self._db.table(self.table).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)
        result = query.execute()
        return result.data[0] if result.data else None

"""
Language module interface.

The preference store abstracts the durable client storage that keeps
the last language a user explicitly chose.
"""

from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class IPreferenceStore(Protocol):
    """Key/value storage for user preferences."""

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a stored value.

        Returns:
            The stored string, or None if nothing is stored

        Raises:
            OSError: If the backing storage is unavailable
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        """Persist a value under key."""
        ...

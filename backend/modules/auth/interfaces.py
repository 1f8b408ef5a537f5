"""
Authentication module interface.

Other modules should depend on ISessionProvider and IAdminAllowList, not
on the concrete implementations. This enables testing with mocks and
swapping the remote data service.
"""

from typing import Callable, Protocol, Optional, runtime_checkable

from .models import SessionUser, Profile

SessionListener = Callable[[Optional[SessionUser]], None]


@runtime_checkable
class ISessionProvider(Protocol):
    """
    Interface for session and profile lookups.

    The gates only read through this interface; sign-in and sign-out
    happen elsewhere and are observed via on_session_change.
    """

    async def get_session(self) -> Optional[SessionUser]:
        """
        Get the user of the current session.

        Returns:
            SessionUser if signed in, None otherwise

        Raises:
            SessionFetchError: If the session cannot be read
        """
        ...

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register for sign-in/sign-out notifications.

        Returns:
            A function that removes the listener
        """
        ...

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """
        Get a user's profile.

        Args:
            user_id: Supabase user ID (UUID)

        Returns:
            Profile if found, None otherwise

        Raises:
            ProfileFetchError: If the lookup fails
        """
        ...


@runtime_checkable
class IAdminAllowList(Protocol):
    """Server-side list of identities allowed into the admin console."""

    async def is_admin(self, user_id: str) -> bool:
        """
        Check whether a user is on the admin allow-list.

        Raises:
            AdminCheckError: If the allow-list cannot be queried
        """
        ...

"""
Session/Profile Provider implementations.

Provides both in-memory (for testing and development) and Supabase-backed
(for production) implementations, plus a token-backed provider used by
the HTTP API where the session comes from a validated bearer JWT.
"""

import logging
from typing import Callable, Optional

from supabase import Client

from shared.database import get_supabase_anon_client, get_supabase_client
from shared.models import AuthenticatedUser

from .interfaces import ISessionProvider, SessionListener
from .models import SessionUser, Profile, REQUIRED_PROFILE_FIELDS
from .repository import ProfileRepository
from .exceptions import SessionFetchError, ProfileFetchError

logger = logging.getLogger(__name__)


def compute_profile_completeness(profile: Optional[Profile]) -> bool:
    """
    Whether every required profile field is filled in.

    A server-computed completeness flag counts as complete; otherwise
    each required field must be non-blank.
    """
    if profile is None:
        return False
    if profile.required_fields_complete:
        return True
    return all(
        (getattr(profile, field) or "").strip()
        for field in REQUIRED_PROFILE_FIELDS
    )


class InMemorySessionProvider(ISessionProvider):
    """
    Session provider with in-memory storage.

    For testing and development. Use SupabaseSessionProvider for production.
    """

    def __init__(
        self,
        user: Optional[SessionUser] = None,
        profiles: Optional[dict[str, Profile]] = None,
    ):
        self._user = user
        self._profiles: dict[str, Profile] = dict(profiles or {})
        self._listeners: list[SessionListener] = []

    async def get_session(self) -> Optional[SessionUser]:
        return self._user

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        return self._profiles.get(user_id)

    def set_profile(self, profile: Profile) -> None:
        self._profiles[profile.id] = profile

    def sign_in(self, user: SessionUser, profile: Optional[Profile] = None) -> None:
        """Start a session and notify listeners."""
        if profile is not None:
            self.set_profile(profile)
        self._user = user
        self._notify()

    def sign_out(self) -> None:
        """End the session and notify listeners."""
        self._user = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._user)


class SupabaseSessionProvider(ISessionProvider):
    """
    Session provider backed by Supabase Auth and the profiles table.

    The session lives in the anon-key client; profiles are read through
    ProfileRepository.
    """

    def __init__(self, client: Client, repository: Optional[ProfileRepository] = None):
        self._client = client
        self._profiles = repository or ProfileRepository(client)

    async def get_session(self) -> Optional[SessionUser]:
        try:
            session = self._client.auth.get_session()
        except Exception as e:
            raise SessionFetchError(str(e)) from e
        return self._to_session_user(session)

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        def callback(event, session) -> None:
            logger.debug(f"Auth state change: {event}")
            listener(self._to_session_user(session))

        subscription = self._client.auth.on_auth_state_change(callback)
        return subscription.unsubscribe

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            return self._profiles.get_profile_by_id(user_id)
        except Exception as e:
            raise ProfileFetchError(user_id, str(e)) from e

    @staticmethod
    def _to_session_user(session) -> Optional[SessionUser]:
        if session is None or session.user is None:
            return None
        user = session.user
        return SessionUser(
            id=user.id,
            email=user.email,
            email_verified=user.email_confirmed_at is not None,
        )


class TokenSessionProvider(ISessionProvider):
    """
    Session provider for a single API request.

    The session is the user from a validated bearer token (or none);
    profiles are read with the service-role client.
    """

    def __init__(
        self,
        user: Optional[AuthenticatedUser],
        repository: Optional[ProfileRepository] = None,
    ):
        self._user = user
        self._repository = repository

    async def get_session(self) -> Optional[SessionUser]:
        if self._user is None:
            return None
        # None means the token did not say, so the gate asks the profile
        return SessionUser(
            id=self._user.id,
            email=self._user.email,
            email_verified=self._user.email_verified,
        )

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        # A request's session never changes
        return lambda: None

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            if self._repository is None:
                self._repository = ProfileRepository(get_supabase_client())
            return self._repository.get_profile_by_id(user_id)
        except Exception as e:
            raise ProfileFetchError(user_id, str(e)) from e


# Module-level instance getter
_provider_instance: Optional[ISessionProvider] = None


def get_session_provider() -> ISessionProvider:
    """Get the session provider singleton."""
    global _provider_instance
    if _provider_instance is None:
        _provider_instance = SupabaseSessionProvider(get_supabase_anon_client())
    return _provider_instance


def reset_session_provider() -> None:
    """Reset the session provider singleton (for testing)."""
    global _provider_instance
    _provider_instance = None

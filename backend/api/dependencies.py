"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Swapping the remote data service (or mocking it in tests) only means
changing the implementation here.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Depends

from shared.models import AuthenticatedUser

from .middleware.auth import get_optional_user

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.access import GateChain
    from modules.app_settings.interfaces import ISettingsProvider
    from modules.auth.interfaces import IAdminAllowList, ISessionProvider
    from modules.auth.repository import ProfileRepository
    from modules.routing import RouteDispatcher
    from modules.shell import ShellComposer


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._settings_provider: "ISettingsProvider | None" = None
        self._allow_list: "IAdminAllowList | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._dispatcher: "RouteDispatcher | None" = None
        self._chain: "GateChain | None" = None
        self._composer: "ShellComposer | None" = None

    @property
    def settings_provider(self) -> "ISettingsProvider":
        """Get the maintenance settings provider."""
        if self._settings_provider is None:
            from modules.app_settings.service import get_settings_provider
            self._settings_provider = get_settings_provider()
        return self._settings_provider

    @property
    def allow_list(self) -> "IAdminAllowList":
        """Get the admin allow-list."""
        if self._allow_list is None:
            from modules.auth.admin import get_admin_allow_list
            self._allow_list = get_admin_allow_list()
        return self._allow_list

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository (service-role client)."""
        if self._profile_repository is None:
            from modules.auth.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_repository = ProfileRepository(get_supabase_client())
        return self._profile_repository

    @property
    def dispatcher(self) -> "RouteDispatcher":
        """Get the route dispatcher."""
        if self._dispatcher is None:
            from modules.routing import get_route_dispatcher
            self._dispatcher = get_route_dispatcher()
        return self._dispatcher

    @property
    def chain(self) -> "GateChain":
        """Get the gate chain, honoring the maintenance fail-closed switch."""
        if self._chain is None:
            from modules.access import GateChain, MaintenanceGate
            from shared.config import get_settings
            fail_closed = get_settings().maintenance_fail_closed
            self._chain = GateChain(MaintenanceGate(fail_closed=fail_closed))
        return self._chain

    @property
    def composer(self) -> "ShellComposer":
        """Get the shell composer."""
        if self._composer is None:
            from modules.shell import ShellComposer
            self._composer = ShellComposer()
        return self._composer

    def session_provider(self, user: Optional[AuthenticatedUser]) -> "ISessionProvider":
        """Session provider for one request, from its bearer token."""
        from modules.auth.service import TokenSessionProvider
        return TokenSessionProvider(user, self.profile_repository if user else None)

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._settings_provider = None
        self._allow_list = None
        self._profile_repository = None
        self._dispatcher = None
        self._chain = None
        self._composer = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_settings_provider() -> "ISettingsProvider":
    """FastAPI dependency for the settings provider."""
    return get_container().settings_provider


def get_allow_list() -> "IAdminAllowList":
    """FastAPI dependency for the admin allow-list."""
    return get_container().allow_list


def get_dispatcher() -> "RouteDispatcher":
    """FastAPI dependency for the route dispatcher."""
    return get_container().dispatcher


def get_gate_chain() -> "GateChain":
    """FastAPI dependency for the gate chain."""
    return get_container().chain


def get_shell_composer() -> "ShellComposer":
    """FastAPI dependency for the shell composer."""
    return get_container().composer


def get_profile_repository() -> "ProfileRepository":
    """FastAPI dependency for the profile repository."""
    return get_container().profile_repository


def get_request_session_provider(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> "ISessionProvider":
    """FastAPI dependency for the current request's session."""
    return get_container().session_provider(user)

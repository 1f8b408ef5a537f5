"""
Authentication module exceptions.

Raised by the Session/Profile Provider when the remote data service
cannot answer. Gates treat these as "unknown" and fail closed.
"""

from shared.exceptions import DataFetchFailedError


class SessionFetchError(DataFetchFailedError):
    """Raised when the current session cannot be read."""

    def __init__(self, message: str = "Failed to read the current session"):
        super().__init__(message, service="supabase-auth", code="SESSION_FETCH_FAILED")


class ProfileFetchError(DataFetchFailedError):
    """Raised when a profile lookup fails."""

    def __init__(self, user_id: str, message: str = "Failed to fetch profile"):
        super().__init__(
            message,
            service="supabase",
            code="PROFILE_FETCH_FAILED",
            details={"user_id": user_id},
        )


class AdminCheckError(DataFetchFailedError):
    """Raised when the admin allow-list cannot be queried."""

    def __init__(self, user_id: str, message: str = "Failed to check admin allow-list"):
        super().__init__(
            message,
            service="supabase",
            code="ADMIN_CHECK_FAILED",
            details={"user_id": user_id},
        )

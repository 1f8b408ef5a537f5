"""
Residual paths the access-control layer links to or exempts.
"""

SIGNIN_PATH = "/signin"
VERIFY_EMAIL_PATH = "/verify-email"
COMPLETE_PROFILE_PATH = "/member/complete-profile"
MEMBER_HOME_PATH = "/member/dashboard"
ADMIN_PREFIX = "/admin"

AUTH_PATHS = frozenset({
    SIGNIN_PATH,
    "/signup",
    "/forgot-password",
    "/reset-password",
    "/admin/login",
})


def clean_residual(residual_path: str) -> str:
    """Drop a trailing slash ("/signin/" -> "/signin"); "" becomes "/"."""
    if not residual_path:
        return "/"
    if len(residual_path) > 1 and residual_path.endswith("/"):
        return residual_path.rstrip("/") or "/"
    return residual_path


def is_admin_path(residual_path: str) -> bool:
    path = clean_residual(residual_path)
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def is_auth_path(residual_path: str) -> bool:
    return clean_residual(residual_path) in AUTH_PATHS

"""
Authorization gates.

Each gate looks at a GateContext and either passes (returns None), asks
for a loading placeholder (returns a loading decision), or blocks by
raising an AccessDeniedError. When a gate cannot decide because its
data failed to load, it blocks: `fail_closed` gives the most restrictive
outcome the gate can produce.
"""

import logging
from typing import Callable, Optional
from urllib.parse import quote

from modules.auth.models import Profile
from modules.auth.service import compute_profile_completeness
from modules.i18n import get_lang_path

from .exceptions import (
    AccessDeniedError,
    MaintenanceActiveError,
    UnauthenticatedError,
    UnverifiedError,
    ProfileIncompleteError,
    RoleDeniedError,
)
from .models import (
    GateContext,
    GateDecision,
    GateKind,
    GateRequirement,
    LoadStatus,
    RoleGateFlavor,
    SessionStatus,
)
from .paths import (
    SIGNIN_PATH,
    VERIFY_EMAIL_PATH,
    COMPLETE_PROFILE_PATH,
    MEMBER_HOME_PATH,
    clean_residual,
    is_admin_path,
)

logger = logging.getLogger(__name__)


class Gate:
    """Base class for gates."""

    name: str = "gate"

    def check(self, ctx: GateContext, requirement: GateRequirement) -> Optional[GateDecision]:
        raise NotImplementedError

    def fail_closed(self, ctx: GateContext, requirement: GateRequirement) -> AccessDeniedError:
        raise NotImplementedError


class MaintenanceGate(Gate):
    """
    Process-wide maintenance switch.

    Admin paths and sign-in stay reachable so operators can still work.
    """

    name = "maintenance"

    def __init__(self, fail_closed: bool = True):
        self._fail_closed = fail_closed

    @staticmethod
    def is_exempt(residual_path: str) -> bool:
        return is_admin_path(residual_path) or clean_residual(residual_path) == SIGNIN_PATH

    def check(self, ctx: GateContext, requirement: Optional[GateRequirement] = None) -> Optional[GateDecision]:
        if self.is_exempt(ctx.residual_path):
            return None

        state = ctx.maintenance
        if state.status == LoadStatus.LOADING:
            return GateDecision.loading(self.name)
        if state.status == LoadStatus.FAILED:
            if self._fail_closed:
                raise self.fail_closed(ctx, requirement)
            return None
        if state.settings is not None and state.settings.maintenance_mode:
            raise MaintenanceActiveError(state.settings.maintenance_message)
        return None

    def fail_closed(self, ctx: GateContext, requirement: Optional[GateRequirement] = None) -> AccessDeniedError:
        return MaintenanceActiveError()


class SessionGate(Gate):
    """Requires a signed-in user; waits while the session is loading."""

    name = "session"

    def check(self, ctx: GateContext, requirement: GateRequirement) -> Optional[GateDecision]:
        if ctx.session.status == SessionStatus.LOADING:
            return GateDecision.loading(self.name)
        if ctx.session.status == SessionStatus.ABSENT or ctx.session.user is None:
            raise self.fail_closed(ctx, requirement)
        return None

    def fail_closed(self, ctx: GateContext, requirement: GateRequirement) -> AccessDeniedError:
        signin = get_lang_path(ctx.language, SIGNIN_PATH)
        return UnauthenticatedError(f"{signin}?next={quote(ctx.canonical_path, safe='')}")


class EmailVerifiedGate(Gate):
    """
    Requires a confirmed email address.

    The session's own verification flag wins; when the session does not
    say, the profile's flag is used.
    """

    name = "email-verified"

    def check(self, ctx: GateContext, requirement: GateRequirement) -> Optional[GateDecision]:
        verified = ctx.session.user.email_verified if ctx.session.user else None
        if verified is None:
            if ctx.profile.status == LoadStatus.LOADING:
                return GateDecision.loading(self.name)
            if ctx.profile.status == LoadStatus.READY and ctx.profile.profile is not None:
                verified = ctx.profile.profile.email_verified
        if not verified:
            raise self.fail_closed(ctx, requirement)
        return None

    def fail_closed(self, ctx: GateContext, requirement: GateRequirement) -> AccessDeniedError:
        return UnverifiedError(get_lang_path(ctx.language, VERIFY_EMAIL_PATH))


class ProfileCompleteGate(Gate):
    """Requires every required profile field to be filled in."""

    name = "profile-complete"

    def __init__(self, is_complete: Callable[[Optional[Profile]], bool] = compute_profile_completeness):
        self._is_complete = is_complete

    def check(self, ctx: GateContext, requirement: GateRequirement) -> Optional[GateDecision]:
        if ctx.profile.status == LoadStatus.LOADING:
            return GateDecision.loading(self.name)
        if ctx.profile.status == LoadStatus.FAILED or not self._is_complete(ctx.profile.profile):
            raise self.fail_closed(ctx, requirement)
        return None

    def fail_closed(self, ctx: GateContext, requirement: GateRequirement) -> AccessDeniedError:
        return ProfileIncompleteError(get_lang_path(ctx.language, COMPLETE_PROFILE_PATH))


class RoleGate(Gate):
    """
    Requires the profile's role to be in the route's allow-list.

    A profile that has not arrived yet means "still loading", never
    "denied", so a permitted user is not bounced while it settles.
    Subclasses decide what a denial looks like.
    """

    name = "role"

    def check(self, ctx: GateContext, requirement: GateRequirement) -> Optional[GateDecision]:
        if ctx.profile.status == LoadStatus.LOADING:
            return GateDecision.loading(self.name)
        profile = ctx.profile.profile
        if ctx.profile.status == LoadStatus.FAILED or profile is None:
            raise self.fail_closed(ctx, requirement)

        role = (profile.role or "").strip().lower()
        allowed = {r.value for r in requirement.roles}
        if role not in allowed:
            logger.debug(f"Role {profile.role!r} not in {sorted(allowed)} for {ctx.residual_path}")
            raise self.deny(ctx, requirement, self.name)
        return None

    def fail_closed(self, ctx: GateContext, requirement: GateRequirement) -> AccessDeniedError:
        return self.deny(ctx, requirement, self.name)

    def deny(self, ctx: GateContext, requirement: GateRequirement, gate: str) -> RoleDeniedError:
        raise NotImplementedError


class MessagingRoleGate(RoleGate):
    """Denial shows a blocked message linking back to the member dashboard."""

    def deny(self, ctx: GateContext, requirement: GateRequirement, gate: str) -> RoleDeniedError:
        return RoleDeniedError(gate, call_to_action=get_lang_path(ctx.language, MEMBER_HOME_PATH))


class RedirectingRoleGate(RoleGate):
    """Denial renders nothing and redirects to the route's safe default."""

    def deny(self, ctx: GateContext, requirement: GateRequirement, gate: str) -> RoleDeniedError:
        return RoleDeniedError(gate, redirect_to=get_lang_path(ctx.language, requirement.redirect_to))


ROLE_GATES: dict[RoleGateFlavor, RoleGate] = {
    RoleGateFlavor.MESSAGE: MessagingRoleGate(),
    RoleGateFlavor.REDIRECT: RedirectingRoleGate(),
}


class AdminAllowListGate(Gate):
    """
    Admin console only: the user must be on the admin allow-list.

    A negative or failed answer is treated exactly like a role denial of
    the same flavor.
    """

    name = "admin-allow-list"

    def check(self, ctx: GateContext, requirement: GateRequirement) -> Optional[GateDecision]:
        state = ctx.allow_list
        if state.status == LoadStatus.LOADING:
            return GateDecision.loading(self.name)
        if state.status == LoadStatus.FAILED or not state.allowed:
            raise self.fail_closed(ctx, requirement)
        return None

    def fail_closed(self, ctx: GateContext, requirement: GateRequirement) -> AccessDeniedError:
        return ROLE_GATES[requirement.flavor].deny(ctx, requirement, self.name)


def gate_for(requirement: GateRequirement) -> Gate:
    """The gate instance that enforces a requirement."""
    if requirement.kind == GateKind.ROLE:
        return ROLE_GATES[requirement.flavor]
    return _GATES[requirement.kind]


_GATES: dict[GateKind, Gate] = {
    GateKind.SESSION: SessionGate(),
    GateKind.EMAIL_VERIFIED: EmailVerifiedGate(),
    GateKind.PROFILE_COMPLETE: ProfileCompleteGate(),
    GateKind.ADMIN_ALLOW_LIST: AdminAllowListGate(),
}

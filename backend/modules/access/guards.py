"""
Guard facades.

Pages declare the guards they sit behind; each guard is a thin facade
over the gate chain that names a subset of gates.

    RequireVerifiedAndComplete()
    RequireRole([Role.MODERATOR, Role.ADMIN])
    RequireRole([Role.ADMIN], flavor=RoleGateFlavor.REDIRECT, redirect_to="/member/dashboard")
"""

from typing import Iterable, Optional

from .models import (
    GateContext,
    GateDecision,
    GateKind,
    GateRequirement,
    Role,
    RoleGateFlavor,
)
from .paths import MEMBER_HOME_PATH
from .service import GateChain


class Guard:
    """Base class: a named, ordered set of gate requirements."""

    requirements: tuple[GateRequirement, ...] = ()

    def check(self, ctx: GateContext, chain: Optional[GateChain] = None) -> GateDecision:
        """Evaluate only this guard's gates (maintenance is not included)."""
        return (chain or GateChain()).evaluate(ctx, self.requirements, include_maintenance=False)

    def __repr__(self) -> str:
        kinds = ", ".join(r.kind.value for r in self.requirements)
        return f"{self.__class__.__name__}({kinds})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Guard) and self.requirements == other.requirements

    def __hash__(self) -> int:
        return hash(self.requirements)


class RequireSession(Guard):
    """Signed-in users only."""

    def __init__(self):
        self.requirements = (GateRequirement(kind=GateKind.SESSION),)


class RequireVerified(Guard):
    """Signed in with a confirmed email. Used by the complete-profile page."""

    def __init__(self):
        self.requirements = (
            GateRequirement(kind=GateKind.SESSION),
            GateRequirement(kind=GateKind.EMAIL_VERIFIED),
        )


class RequireVerifiedAndComplete(Guard):
    """Member-area pages: signed in, verified, profile complete."""

    def __init__(self):
        self.requirements = (
            GateRequirement(kind=GateKind.SESSION),
            GateRequirement(kind=GateKind.EMAIL_VERIFIED),
            GateRequirement(kind=GateKind.PROFILE_COMPLETE),
        )


class RequireRole(Guard):
    """Role allow-list, with the denial behavior of the route family."""

    def __init__(
        self,
        roles: Iterable[Role],
        flavor: RoleGateFlavor = RoleGateFlavor.MESSAGE,
        redirect_to: str = MEMBER_HOME_PATH,
    ):
        self.requirements = (
            GateRequirement(kind=GateKind.SESSION),
            GateRequirement(
                kind=GateKind.ROLE,
                roles=frozenset(roles),
                flavor=flavor,
                redirect_to=redirect_to,
            ),
        )


class RequireAdminAllowList(Guard):
    """Admin console: the user must also be on the admin allow-list."""

    def __init__(
        self,
        flavor: RoleGateFlavor = RoleGateFlavor.REDIRECT,
        redirect_to: str = MEMBER_HOME_PATH,
    ):
        self.requirements = (
            GateRequirement(kind=GateKind.SESSION),
            GateRequirement(
                kind=GateKind.ADMIN_ALLOW_LIST,
                flavor=flavor,
                redirect_to=redirect_to,
            ),
        )

"""
Access-control data models.

Snapshots of session, profile, maintenance and allow-list state that
the gates read, and the decision the gate chain produces.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.auth.models import SessionUser, Profile
from modules.app_settings.models import AppSettings
from modules.i18n import Language, DEFAULT_LANGUAGE


class Role(str, Enum):
    """Member roles, lowest to highest."""

    MEMBER = "member"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        """Case-insensitive lookup; None for unknown roles."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class BlockedState(str, Enum):
    """Why rendering is withheld."""

    NONE = "none"
    NEEDS_LOGIN = "needs-login"
    NEEDS_VERIFICATION = "needs-verification"
    NEEDS_PROFILE_COMPLETION = "needs-profile-completion"
    NEEDS_ROLE = "needs-role"
    MAINTENANCE = "maintenance"


class GateKind(str, Enum):
    """Gates a route can require, declared in evaluation order."""

    SESSION = "session"
    EMAIL_VERIFIED = "email-verified"
    PROFILE_COMPLETE = "profile-complete"
    ROLE = "role"
    ADMIN_ALLOW_LIST = "admin-allow-list"


# Global evaluation order. Maintenance is process-wide and always runs first.
GATE_ORDER: tuple[GateKind, ...] = tuple(GateKind)


class RoleGateFlavor(str, Enum):
    """What a failed role check shows."""

    MESSAGE = "message"    # Blocked message with a link (member area)
    REDIRECT = "redirect"  # Programmatic redirect, nothing rendered (admin console)


class RenderKind(str, Enum):
    """What the gated slot renders."""

    CONTENT = "content"
    LOADING = "loading"
    BLOCKED = "blocked"
    MAINTENANCE = "maintenance"
    REDIRECT = "redirect"


class GateRequirement(BaseModel):
    """One gate a route opts in to, with its parameters."""

    kind: GateKind
    roles: frozenset[Role] = frozenset()
    flavor: RoleGateFlavor = RoleGateFlavor.MESSAGE
    redirect_to: str = Field(default="/member/dashboard", description="Residual path for redirects")

    model_config = {"frozen": True}


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SessionStatus(str, Enum):
    LOADING = "loading"
    ABSENT = "absent"
    PRESENT = "present"


class SessionState(BaseModel):
    """Tri-state session: loading, absent, or present(user)."""

    status: SessionStatus = SessionStatus.LOADING
    user: Optional[SessionUser] = None

    model_config = {"frozen": True}

    @classmethod
    def loading(cls) -> "SessionState":
        return cls(status=SessionStatus.LOADING)

    @classmethod
    def absent(cls) -> "SessionState":
        return cls(status=SessionStatus.ABSENT)

    @classmethod
    def present(cls, user: SessionUser) -> "SessionState":
        return cls(status=SessionStatus.PRESENT, user=user)


class ProfileState(BaseModel):
    """Profile lookup state for the current session."""

    status: LoadStatus = LoadStatus.LOADING
    profile: Optional[Profile] = None

    model_config = {"frozen": True}

    @classmethod
    def from_result(cls, profile: Optional[Profile]) -> "ProfileState":
        # A present session without a profile row is still settling
        if profile is None:
            return cls(status=LoadStatus.LOADING)
        return cls(status=LoadStatus.READY, profile=profile)


class MaintenanceState(BaseModel):
    """Maintenance flag state, independent of the session."""

    status: LoadStatus = LoadStatus.LOADING
    settings: Optional[AppSettings] = None

    model_config = {"frozen": True}


class AllowListState(BaseModel):
    """Admin allow-list answer for the current session."""

    status: LoadStatus = LoadStatus.LOADING
    allowed: bool = False

    model_config = {"frozen": True}


class GateContext(BaseModel):
    """Everything the gates may look at for one evaluation."""

    canonical_path: str
    residual_path: str
    language: Language = DEFAULT_LANGUAGE
    session: SessionState = Field(default_factory=SessionState)
    profile: ProfileState = Field(default_factory=ProfileState)
    maintenance: MaintenanceState = Field(default_factory=MaintenanceState)
    allow_list: AllowListState = Field(default_factory=AllowListState)

    model_config = {"frozen": True}


class GateDecision(BaseModel):
    """Outcome of the gate chain for one route."""

    render: RenderKind
    blocked_state: BlockedState = BlockedState.NONE
    gate: Optional[str] = Field(None, description="Gate that produced the outcome")
    call_to_action: Optional[str] = Field(None, description="Canonical link offered to the user")
    redirect_to: Optional[str] = Field(None, description="Canonical redirect target")
    message: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def allow(cls) -> "GateDecision":
        return cls(render=RenderKind.CONTENT)

    @classmethod
    def loading(cls, gate: str) -> "GateDecision":
        return cls(render=RenderKind.LOADING, gate=gate)

    @property
    def allowed(self) -> bool:
        return self.render == RenderKind.CONTENT

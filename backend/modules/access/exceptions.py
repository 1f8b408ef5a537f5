"""
Access-control exceptions.

Gates raise these when they block; the gate chain turns them into a
blocked-state view. They never reach the user as errors.
"""

from typing import Optional

from shared.exceptions import AuthorizationError

from .models import BlockedState, GateDecision, RenderKind


class AccessDeniedError(AuthorizationError):
    """Base class for every blocked outcome."""

    blocked_state: BlockedState = BlockedState.NONE
    render: RenderKind = RenderKind.BLOCKED

    def __init__(
        self,
        message: str,
        gate: str,
        call_to_action: Optional[str] = None,
        redirect_to: Optional[str] = None,
    ):
        super().__init__(
            message,
            code=self.blocked_state.value.upper().replace("-", "_"),
            details={"gate": gate},
        )
        self.gate = gate
        self.call_to_action = call_to_action
        self.redirect_to = redirect_to

    def to_decision(self) -> GateDecision:
        return GateDecision(
            render=self.render,
            blocked_state=self.blocked_state,
            gate=self.gate,
            call_to_action=self.call_to_action,
            redirect_to=self.redirect_to,
            message=self.message,
        )


class MaintenanceActiveError(AccessDeniedError):
    """The site is in maintenance and this path is not exempt."""

    blocked_state = BlockedState.MAINTENANCE
    render = RenderKind.MAINTENANCE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "We are performing scheduled maintenance.", gate="maintenance")


class UnauthenticatedError(AccessDeniedError):
    """No session."""

    blocked_state = BlockedState.NEEDS_LOGIN

    def __init__(self, call_to_action: str):
        super().__init__("Sign in to continue.", gate="session", call_to_action=call_to_action)


class UnverifiedError(AccessDeniedError):
    """Session present but the email address is not confirmed."""

    blocked_state = BlockedState.NEEDS_VERIFICATION

    def __init__(self, call_to_action: str):
        super().__init__(
            "Verify your email address to continue.",
            gate="email-verified",
            call_to_action=call_to_action,
        )


class ProfileIncompleteError(AccessDeniedError):
    """Required profile fields are missing (or could not be checked)."""

    blocked_state = BlockedState.NEEDS_PROFILE_COMPLETION

    def __init__(self, call_to_action: str):
        super().__init__(
            "Complete your profile to continue.",
            gate="profile-complete",
            call_to_action=call_to_action,
        )


class RoleDeniedError(AccessDeniedError):
    """
    The user's role is not allowed on this route.

    Messaging routes show a blocked message; redirecting routes render
    nothing and send the user to a safe default page.
    """

    blocked_state = BlockedState.NEEDS_ROLE

    def __init__(
        self,
        gate: str,
        call_to_action: Optional[str] = None,
        redirect_to: Optional[str] = None,
    ):
        super().__init__(
            "You do not have permission to view this page.",
            gate=gate,
            call_to_action=call_to_action,
            redirect_to=redirect_to,
        )
        if redirect_to is not None:
            self.render = RenderKind.REDIRECT

"""
Access-control module.

The Authorization Gate Chain: maintenance, session, email verification,
profile completeness, role membership and the admin allow-list, applied
in a fixed order and failing closed.

Public API:
- GateChain, load_gate_context: evaluation
- Guard facades: RequireSession, RequireVerified, RequireVerifiedAndComplete,
  RequireRole, RequireAdminAllowList
- Gate variants: MessagingRoleGate, RedirectingRoleGate, ...
- Models: BlockedState, GateDecision, GateContext, Role, ...
- Exceptions: AccessDeniedError and its subclasses
"""

from .models import (
    AllowListState,
    BlockedState,
    GATE_ORDER,
    GateContext,
    GateDecision,
    GateKind,
    GateRequirement,
    LoadStatus,
    MaintenanceState,
    ProfileState,
    RenderKind,
    Role,
    RoleGateFlavor,
    SessionState,
    SessionStatus,
)
from .gates import (
    Gate,
    MaintenanceGate,
    SessionGate,
    EmailVerifiedGate,
    ProfileCompleteGate,
    RoleGate,
    MessagingRoleGate,
    RedirectingRoleGate,
    AdminAllowListGate,
)
from .guards import (
    Guard,
    RequireSession,
    RequireVerified,
    RequireVerifiedAndComplete,
    RequireRole,
    RequireAdminAllowList,
)
from .service import GateChain, load_gate_context, order_requirements, needs_profile, needs_allow_list
from .exceptions import (
    AccessDeniedError,
    MaintenanceActiveError,
    UnauthenticatedError,
    UnverifiedError,
    ProfileIncompleteError,
    RoleDeniedError,
)

__all__ = [
    # Models
    "AllowListState",
    "BlockedState",
    "GATE_ORDER",
    "GateContext",
    "GateDecision",
    "GateKind",
    "GateRequirement",
    "LoadStatus",
    "MaintenanceState",
    "ProfileState",
    "RenderKind",
    "Role",
    "RoleGateFlavor",
    "SessionState",
    "SessionStatus",
    # Gates
    "Gate",
    "MaintenanceGate",
    "SessionGate",
    "EmailVerifiedGate",
    "ProfileCompleteGate",
    "RoleGate",
    "MessagingRoleGate",
    "RedirectingRoleGate",
    "AdminAllowListGate",
    # Guards
    "Guard",
    "RequireSession",
    "RequireVerified",
    "RequireVerifiedAndComplete",
    "RequireRole",
    "RequireAdminAllowList",
    # Chain
    "GateChain",
    "load_gate_context",
    "order_requirements",
    "needs_profile",
    "needs_allow_list",
    # Exceptions
    "AccessDeniedError",
    "MaintenanceActiveError",
    "UnauthenticatedError",
    "UnverifiedError",
    "ProfileIncompleteError",
    "RoleDeniedError",
]

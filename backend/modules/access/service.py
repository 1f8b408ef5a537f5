"""
Authorization Gate Chain.

Gates run in one fixed global order regardless of which subset a route
declares; the first gate that blocks (or asks to wait) decides. Any
unexpected error inside a gate blocks with that gate's most restrictive
outcome.
"""

import asyncio
import logging
from typing import Iterable, Optional

from modules.auth.interfaces import ISessionProvider, IAdminAllowList
from modules.app_settings.interfaces import ISettingsProvider
from modules.i18n import Language

from .exceptions import AccessDeniedError
from .gates import Gate, MaintenanceGate, gate_for
from .models import (
    AllowListState,
    GATE_ORDER,
    GateContext,
    GateDecision,
    GateKind,
    GateRequirement,
    LoadStatus,
    MaintenanceState,
    ProfileState,
    SessionState,
)

logger = logging.getLogger(__name__)

_PROFILE_GATES = {GateKind.EMAIL_VERIFIED, GateKind.PROFILE_COMPLETE, GateKind.ROLE}


def order_requirements(requirements: Iterable[GateRequirement]) -> list[GateRequirement]:
    """
    Put requirements in global gate order.

    Duplicates of a kind keep the first declaration, and any gated route
    implicitly requires a session.
    """
    by_kind: dict[GateKind, GateRequirement] = {}
    for requirement in requirements:
        by_kind.setdefault(requirement.kind, requirement)
    if by_kind and GateKind.SESSION not in by_kind:
        by_kind[GateKind.SESSION] = GateRequirement(kind=GateKind.SESSION)
    return [by_kind[kind] for kind in GATE_ORDER if kind in by_kind]


def needs_profile(requirements: Iterable[GateRequirement]) -> bool:
    return any(r.kind in _PROFILE_GATES for r in requirements)


def needs_allow_list(requirements: Iterable[GateRequirement]) -> bool:
    return any(r.kind == GateKind.ADMIN_ALLOW_LIST for r in requirements)


class GateChain:
    """Evaluates a route's requirements against a context snapshot."""

    def __init__(self, maintenance: Optional[MaintenanceGate] = None):
        self._maintenance = maintenance or MaintenanceGate()

    @property
    def maintenance_gate(self) -> MaintenanceGate:
        return self._maintenance

    def evaluate(
        self,
        ctx: GateContext,
        requirements: Iterable[GateRequirement],
        include_maintenance: bool = True,
    ) -> GateDecision:
        if include_maintenance:
            decision = self._run(self._maintenance, ctx, None)
            if decision is not None:
                return decision

        for requirement in order_requirements(requirements):
            decision = self._run(gate_for(requirement), ctx, requirement)
            if decision is not None:
                return decision

        return GateDecision.allow()

    def _run(
        self,
        gate: Gate,
        ctx: GateContext,
        requirement: Optional[GateRequirement],
    ) -> Optional[GateDecision]:
        try:
            return gate.check(ctx, requirement)
        except AccessDeniedError as e:
            return e.to_decision()
        except Exception:
            logger.exception(f"Gate {gate.name} raised; blocking")
            return gate.fail_closed(ctx, requirement).to_decision()


async def load_gate_context(
    canonical_path: str,
    residual_path: str,
    language: Language,
    requirements: Iterable[GateRequirement],
    sessions: ISessionProvider,
    settings: ISettingsProvider,
    allow_list: IAdminAllowList,
) -> GateContext:
    """
    Fetch everything the gates need for one evaluation.

    Used where there is no long-lived runtime (the HTTP API). Failed
    lookups are recorded as failed, so the gates block on them.
    """
    requirements = list(requirements)
    settings_result, session_result = await asyncio.gather(
        settings.get_app_settings(),
        sessions.get_session(),
        return_exceptions=True,
    )

    if isinstance(settings_result, BaseException):
        logger.warning(f"Settings lookup failed: {settings_result}")
        maintenance = MaintenanceState(status=LoadStatus.FAILED)
    else:
        maintenance = MaintenanceState(status=LoadStatus.READY, settings=settings_result)

    if isinstance(session_result, BaseException):
        logger.warning(f"Session lookup failed: {session_result}")
        session = SessionState.absent()
    elif session_result is None:
        session = SessionState.absent()
    else:
        session = SessionState.present(session_result)

    profile = ProfileState()
    allowed = AllowListState()
    if session.user is not None:
        if needs_profile(requirements):
            try:
                profile = ProfileState.from_result(await sessions.get_profile(session.user.id))
            except Exception as e:
                logger.warning(f"Profile lookup failed: {e}")
                profile = ProfileState(status=LoadStatus.FAILED)
        if needs_allow_list(requirements):
            try:
                is_admin = await allow_list.is_admin(session.user.id)
                allowed = AllowListState(status=LoadStatus.READY, allowed=is_admin)
            except Exception as e:
                logger.warning(f"Admin allow-list lookup failed: {e}")
                allowed = AllowListState(status=LoadStatus.FAILED)

    return GateContext(
        canonical_path=canonical_path,
        residual_path=residual_path,
        language=language,
        session=session,
        profile=profile,
        maintenance=maintenance,
        allow_list=allowed,
    )

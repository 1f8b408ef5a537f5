"""Tests for the authorization gate chain."""

from unittest.mock import patch

import pytest

from modules.access import (
    AllowListState,
    BlockedState,
    GateChain,
    GateContext,
    GateKind,
    GateRequirement,
    LoadStatus,
    MaintenanceGate,
    MaintenanceState,
    ProfileState,
    RenderKind,
    RequireAdminAllowList,
    RequireRole,
    RequireSession,
    RequireVerified,
    RequireVerifiedAndComplete,
    Role,
    RoleGateFlavor,
    SessionState,
    order_requirements,
)
from modules.app_settings import AppSettings
from modules.auth import Profile, SessionUser
from modules.i18n import Language

MEMBER = RequireVerifiedAndComplete().requirements
MODERATOR = RequireVerifiedAndComplete().requirements + RequireRole([Role.MODERATOR, Role.ADMIN]).requirements
ADMIN = (
    RequireRole([Role.ADMIN, Role.SUPER_ADMIN], flavor=RoleGateFlavor.REDIRECT).requirements
    + RequireAdminAllowList().requirements
)

USER = SessionUser(id="u1", email="u1@example.com", email_verified=True)
COMPLETE = dict(full_name="Ani", phone="0812", telegram="@ani", city="Jakarta")


def make_profile(**overrides) -> Profile:
    values = dict(id="u1", role="member", email_verified=True, **COMPLETE)
    values.update(overrides)
    return Profile(**values)


def make_ctx(
    path: str = "/en/member/dashboard",
    session: SessionState = None,
    profile=None,
    profile_status: LoadStatus = None,
    maintenance: bool = False,
    maintenance_status: LoadStatus = LoadStatus.READY,
    allowed: bool = None,
) -> GateContext:
    language = Language(path.split("/")[1])
    if session is None:
        session = SessionState.present(USER)
    if profile_status is None:
        profile_state = ProfileState.from_result(profile)
    else:
        profile_state = ProfileState(status=profile_status, profile=profile)
    allow = AllowListState() if allowed is None else AllowListState(status=LoadStatus.READY, allowed=allowed)
    return GateContext(
        canonical_path=path,
        residual_path=path[len(language.value) + 1:],
        language=language,
        session=session,
        profile=profile_state,
        maintenance=MaintenanceState(
            status=maintenance_status,
            settings=AppSettings(maintenance_mode=maintenance, maintenance_message="Back soon"),
        ),
        allow_list=allow,
    )


@pytest.fixture
def chain():
    return GateChain()


class TestSessionGate:
    def test_loading_shows_placeholder(self, chain):
        decision = chain.evaluate(make_ctx(session=SessionState.loading()), MEMBER)
        assert decision.render == RenderKind.LOADING
        assert decision.blocked_state == BlockedState.NONE

    def test_absent_needs_login(self, chain):
        decision = chain.evaluate(make_ctx(session=SessionState.absent()), MEMBER)
        assert decision.blocked_state == BlockedState.NEEDS_LOGIN
        assert decision.render == RenderKind.BLOCKED
        assert decision.call_to_action == "/en/signin?next=%2Fen%2Fmember%2Fdashboard"

    def test_cta_in_page_language(self, chain):
        decision = chain.evaluate(make_ctx("/id/member/dashboard", session=SessionState.absent()), MEMBER)
        assert decision.call_to_action.startswith("/id/signin?next=")


class TestEmailVerifiedGate:
    def test_unverified_session(self, chain):
        user = SessionUser(id="u1", email_verified=False)
        decision = chain.evaluate(make_ctx(session=SessionState.present(user), profile=make_profile()), MEMBER)
        assert decision.blocked_state == BlockedState.NEEDS_VERIFICATION
        assert decision.call_to_action == "/en/verify-email"

    def test_unknown_falls_back_to_profile(self, chain):
        user = SessionUser(id="u1")
        ctx = make_ctx(session=SessionState.present(user), profile=make_profile(email_verified=True))
        assert chain.evaluate(ctx, MEMBER).allowed

    def test_unknown_with_profile_loading_waits(self, chain):
        user = SessionUser(id="u1")
        decision = chain.evaluate(make_ctx(session=SessionState.present(user)), MEMBER)
        assert decision.render == RenderKind.LOADING

    def test_unknown_with_failed_profile_blocks(self, chain):
        user = SessionUser(id="u1")
        ctx = make_ctx(session=SessionState.present(user), profile_status=LoadStatus.FAILED)
        assert chain.evaluate(ctx, MEMBER).blocked_state == BlockedState.NEEDS_VERIFICATION


class TestProfileCompleteGate:
    def test_scenario_verified_incomplete(self, chain):
        """Session present, verified, profile missing city: needs completion."""
        decision = chain.evaluate(make_ctx(profile=make_profile(city=None)), MEMBER)
        assert decision.blocked_state == BlockedState.NEEDS_PROFILE_COMPLETION
        assert decision.call_to_action == "/en/member/complete-profile"

    def test_blank_field_counts_as_missing(self, chain):
        decision = chain.evaluate(make_ctx(profile=make_profile(phone="   ")), MEMBER)
        assert decision.blocked_state == BlockedState.NEEDS_PROFILE_COMPLETION

    def test_complete_profile_renders(self, chain):
        assert chain.evaluate(make_ctx(profile=make_profile()), MEMBER).allowed

    def test_missing_profile_is_loading(self, chain):
        decision = chain.evaluate(make_ctx(profile=None), MEMBER)
        assert decision.render == RenderKind.LOADING

    def test_failed_profile_fails_closed(self, chain):
        decision = chain.evaluate(make_ctx(profile_status=LoadStatus.FAILED), MEMBER)
        assert decision.blocked_state == BlockedState.NEEDS_PROFILE_COMPLETION

    def test_complete_profile_page_reachable_while_incomplete(self, chain):
        ctx = make_ctx("/en/member/complete-profile", profile=make_profile(city=None))
        assert chain.evaluate(ctx, RequireVerified().requirements).allowed


class TestRoleGate:
    def test_member_on_moderator_route_gets_message(self, chain):
        decision = chain.evaluate(make_ctx("/en/member/news", profile=make_profile()), MODERATOR)
        assert decision.blocked_state == BlockedState.NEEDS_ROLE
        assert decision.render == RenderKind.BLOCKED
        assert decision.call_to_action == "/en/member/dashboard"
        assert decision.redirect_to is None

    def test_role_case_insensitive(self, chain):
        ctx = make_ctx("/en/member/news", profile=make_profile(role="Moderator"))
        assert chain.evaluate(ctx, MODERATOR).allowed

    def test_profile_absent_is_loading_not_denied(self, chain):
        decision = chain.evaluate(make_ctx("/en/member/news", profile=None), MODERATOR)
        assert decision.render == RenderKind.LOADING

    def test_redirecting_variant_renders_nothing(self, chain):
        ctx = make_ctx("/en/admin/control", profile=make_profile(role="member"), allowed=True)
        decision = chain.evaluate(ctx, ADMIN)
        assert decision.render == RenderKind.REDIRECT
        assert decision.blocked_state == BlockedState.NEEDS_ROLE
        assert decision.redirect_to == "/en/member/dashboard"
        assert not decision.allowed


class TestAdminAllowListGate:
    def test_admin_on_list_allowed(self, chain):
        ctx = make_ctx("/en/admin/control", profile=make_profile(role="admin"), allowed=True)
        assert chain.evaluate(ctx, ADMIN).allowed

    def test_admin_not_on_list_redirected(self, chain):
        ctx = make_ctx("/en/admin/control", profile=make_profile(role="admin"), allowed=False)
        decision = chain.evaluate(ctx, ADMIN)
        assert decision.render == RenderKind.REDIRECT
        assert decision.gate == "admin-allow-list"

    def test_pending_answer_is_loading(self, chain):
        ctx = make_ctx("/en/admin/control", profile=make_profile(role="admin"))
        assert chain.evaluate(ctx, ADMIN).render == RenderKind.LOADING

    def test_failed_lookup_treated_as_denial(self, chain):
        ctx = make_ctx("/en/admin/control", profile=make_profile(role="super_admin"))
        ctx = ctx.model_copy(update={"allow_list": AllowListState(status=LoadStatus.FAILED)})
        assert chain.evaluate(ctx, ADMIN).blocked_state == BlockedState.NEEDS_ROLE


class TestMaintenanceGate:
    @pytest.mark.parametrize(
        "path,blocked",
        [
            ("/en/home", True),
            ("/en/admin/control", False),
            ("/en/admin", False),
            ("/en/signin", False),
            ("/en/signin/", False),
            ("/en/signup", True),
            ("/en/administrator", True),
        ],
    )
    def test_bypass_paths(self, chain, path, blocked):
        ctx = make_ctx(path, maintenance=True, profile=make_profile(role="admin"), allowed=True)
        decision = chain.evaluate(ctx, [])
        assert (decision.render == RenderKind.MAINTENANCE) is blocked

    def test_maintenance_beats_every_other_gate(self, chain):
        ctx = make_ctx("/en/member/dashboard", session=SessionState.absent(), maintenance=True)
        decision = chain.evaluate(ctx, MEMBER)
        assert decision.blocked_state == BlockedState.MAINTENANCE
        assert decision.message == "Back soon"

    def test_admin_still_gated_during_maintenance(self, chain):
        ctx = make_ctx("/en/admin/control", session=SessionState.absent(), maintenance=True)
        assert chain.evaluate(ctx, ADMIN).blocked_state == BlockedState.NEEDS_LOGIN

    def test_loading_flag_shows_placeholder(self, chain):
        ctx = make_ctx("/en/home", maintenance_status=LoadStatus.LOADING)
        assert chain.evaluate(ctx, []).render == RenderKind.LOADING

    def test_failed_flag_fails_closed_by_default(self, chain):
        ctx = make_ctx("/en/home", maintenance_status=LoadStatus.FAILED)
        assert chain.evaluate(ctx, []).render == RenderKind.MAINTENANCE

    def test_failed_flag_can_fail_open(self):
        chain = GateChain(MaintenanceGate(fail_closed=False))
        ctx = make_ctx("/en/home", maintenance_status=LoadStatus.FAILED)
        assert chain.evaluate(ctx, []).allowed

    def test_guard_facade_skips_maintenance(self):
        ctx = make_ctx(maintenance=True, profile=make_profile())
        assert RequireVerifiedAndComplete().check(ctx).allowed


class TestChainOrdering:
    def test_order_is_global_not_declared(self):
        declared = [
            GateRequirement(kind=GateKind.ROLE, roles=frozenset({Role.ADMIN})),
            GateRequirement(kind=GateKind.EMAIL_VERIFIED),
        ]
        kinds = [r.kind for r in order_requirements(declared)]
        assert kinds == [GateKind.SESSION, GateKind.EMAIL_VERIFIED, GateKind.ROLE]

    def test_empty_requirements_stay_empty(self):
        assert order_requirements([]) == []

    def test_first_declaration_of_a_kind_wins(self):
        first = GateRequirement(kind=GateKind.ROLE, roles=frozenset({Role.ADMIN}))
        second = GateRequirement(kind=GateKind.ROLE, roles=frozenset({Role.MEMBER}))
        assert order_requirements([first, second])[1] is first

    def test_unexpected_gate_error_fails_closed(self, chain):
        ctx = make_ctx(profile=make_profile())
        with patch(
            "modules.access.gates.ProfileCompleteGate.check",
            side_effect=RuntimeError("boom"),
        ):
            decision = chain.evaluate(ctx, MEMBER)
        assert decision.blocked_state == BlockedState.NEEDS_PROFILE_COMPLETION

    def test_public_route_ignores_session_state(self, chain):
        ctx = make_ctx("/en/news", session=SessionState.loading())
        assert chain.evaluate(ctx, []).allowed

    def test_guard_repr(self):
        assert repr(RequireSession()) == "RequireSession(session)"

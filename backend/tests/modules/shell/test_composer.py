import pytest

from modules.access import BlockedState, GateDecision, RenderKind
from modules.i18n import strip_language
from modules.routing import get_route_dispatcher
from modules.shell import ShellComposer, ShellKind


@pytest.fixture
def composer():
    return ShellComposer()


def compose(composer, canonical_path, decision=None):
    match = get_route_dispatcher().dispatch(strip_language(canonical_path))
    return composer.compose(canonical_path, match, decision)


class TestShellComposer:
    def test_standard_chrome(self, composer):
        layout = compose(composer, "/en/news")

        assert layout.kind == ShellKind.STANDARD
        assert layout.banner and layout.header and layout.footer
        assert layout.toast_host and layout.language_switch
        assert layout.bottom_nav and layout.safe_area_spacer
        assert [item.href for item in layout.nav_items][:2] == ["/en/home", "/en/news"]

    def test_links_follow_page_language(self, composer):
        layout = compose(composer, "/id/dao")
        assert all(item.href.startswith("/id/") for item in layout.nav_items)
        assert layout.active_item == "dao"

    def test_active_item_is_exact(self, composer):
        layout = compose(composer, "/en/news/token-launch")
        assert layout.active_item is None

    def test_auth_page_gets_minimal_chrome(self, composer):
        layout = compose(composer, "/en/signin")

        assert layout.kind == ShellKind.AUTH
        assert layout.header and layout.language_switch
        assert not layout.footer
        assert not layout.bottom_nav

    def test_auth_page_ignores_maintenance(self, composer):
        decision = GateDecision(render=RenderKind.MAINTENANCE, blocked_state=BlockedState.MAINTENANCE)
        assert compose(composer, "/en/signin", decision).kind == ShellKind.AUTH

    def test_maintenance_has_no_chrome(self, composer):
        decision = GateDecision(render=RenderKind.MAINTENANCE, blocked_state=BlockedState.MAINTENANCE)
        layout = compose(composer, "/en/home", decision)

        assert layout.kind == ShellKind.MAINTENANCE
        assert not layout.header
        assert not layout.footer
        assert layout.nav_items == ()

    def test_blocked_page_keeps_chrome(self, composer):
        decision = GateDecision(render=RenderKind.BLOCKED, blocked_state=BlockedState.NEEDS_LOGIN)
        assert compose(composer, "/en/member/dashboard", decision).kind == ShellKind.STANDARD

    def test_admin_pages_have_no_bottom_nav(self, composer):
        layout = compose(composer, "/en/admin/control")

        assert layout.kind == ShellKind.STANDARD
        assert not layout.bottom_nav
        assert not layout.safe_area_spacer
        assert layout.bottom_nav_items == ()

    def test_bottom_nav_marks_member_entry(self, composer):
        layout = compose(composer, "/en/member/dashboard")
        active = [item.key for item in layout.bottom_nav_items if item.active]
        assert active == ["member"]

    def test_error_layout(self, composer):
        layout = composer.error()
        assert layout.kind == ShellKind.ERROR
        assert not layout.header

"""
Shell Composer.

Decides the chrome around a gated page. Pure composition: the gate
decision is an input, nothing here gates.
"""

from typing import Optional

from modules.access import GateDecision, RenderKind
from modules.access.paths import is_admin_path, is_auth_path
from modules.i18n import DEFAULT_LANGUAGE, Language, get_lang_path, language_of
from modules.routing import RouteMatch

from .models import NavItem, ShellKind, ShellLayout

# (key, translation key, residual path)
HEADER_ITEMS: tuple[tuple[str, str, str], ...] = (
    ("home", "nav.home", "/home"),
    ("news", "nav.news", "/news"),
    ("dao", "nav.dao", "/dao"),
    ("marketplace", "nav.marketplace", "/marketplace"),
    ("transparency", "nav.transparency", "/transparency"),
    ("whitepaper", "nav.whitepaper", "/whitepaper"),
)

BOTTOM_NAV_ITEMS: tuple[tuple[str, str, str], ...] = (
    ("home", "nav.home", "/home"),
    ("news", "nav.news", "/news"),
    ("dao", "nav.dao", "/dao"),
    ("transparency", "nav.transparency", "/transparency"),
    ("member", "nav.member", "/member/dashboard"),
)


class ShellComposer:
    """Builds a ShellLayout for a canonical path, route match and decision."""

    def __init__(
        self,
        header_items: tuple[tuple[str, str, str], ...] = HEADER_ITEMS,
        bottom_items: tuple[tuple[str, str, str], ...] = BOTTOM_NAV_ITEMS,
    ):
        self._header_items = header_items
        self._bottom_items = bottom_items

    def compose(
        self,
        canonical_path: str,
        match: RouteMatch,
        decision: Optional[GateDecision] = None,
    ) -> ShellLayout:
        """
        Compose the chrome.

        Args:
            canonical_path: Language-prefixed path being shown
            match: Dispatch result for the path
            decision: Gate chain outcome; None means content is shown

        Returns:
            ShellLayout
        """
        lang = language_of(canonical_path) or DEFAULT_LANGUAGE

        if match.route.auth_page:
            return ShellLayout(kind=ShellKind.AUTH, header=True, language_switch=True)

        if decision is not None and decision.render == RenderKind.MAINTENANCE:
            return ShellLayout(kind=ShellKind.MAINTENANCE)

        residual = match.residual_path
        show_bottom = not (is_auth_path(residual) or is_admin_path(residual))

        return ShellLayout(
            kind=ShellKind.STANDARD,
            banner=True,
            header=True,
            language_switch=True,
            footer=True,
            toast_host=True,
            bottom_nav=show_bottom,
            safe_area_spacer=show_bottom,
            nav_items=self._items(self._header_items, lang, canonical_path),
            bottom_nav_items=self._items(self._bottom_items, lang, canonical_path) if show_bottom else (),
        )

    def error(self) -> ShellLayout:
        """Chrome for the error boundary's reload prompt."""
        return ShellLayout(kind=ShellKind.ERROR)

    @staticmethod
    def _items(
        items: tuple[tuple[str, str, str], ...],
        lang: Language,
        canonical_path: str,
    ) -> tuple[NavItem, ...]:
        out = []
        for key, label_key, residual in items:
            href = get_lang_path(lang, residual)
            out.append(NavItem(key=key, label_key=label_key, href=href, active=href == canonical_path))
        return tuple(out)

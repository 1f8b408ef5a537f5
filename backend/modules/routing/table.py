"""
The route table.

Every page of the site is declared here once, with its guards and chrome
flag. Order of declaration only breaks ties the consistency check would
already report; precedence comes from the pattern tiers.
"""

import logging
from typing import Iterable, Optional

from modules.access import (
    RequireAdminAllowList,
    RequireRole,
    RequireVerified,
    RequireVerifiedAndComplete,
    Role,
    RoleGateFlavor,
)
from modules.access.paths import MEMBER_HOME_PATH

from .exceptions import DuplicateRouteError, RouteNotFoundError
from .models import RouteDescriptor, route

logger = logging.getLogger(__name__)

HOME_ROUTE = "home"

_member = RequireVerifiedAndComplete()
_moderator = RequireRole([Role.MODERATOR, Role.ADMIN, Role.SUPER_ADMIN])
_admin_role = RequireRole(
    [Role.ADMIN, Role.SUPER_ADMIN],
    flavor=RoleGateFlavor.REDIRECT,
    redirect_to=MEMBER_HOME_PATH,
)
_admin_list = RequireAdminAllowList(flavor=RoleGateFlavor.REDIRECT, redirect_to=MEMBER_HOME_PATH)
_admin = (_admin_role, _admin_list)


ROUTES: list[RouteDescriptor] = [
    # Public
    route(HOME_ROUTE, "/home", "HomePage"),
    route("news", "/news", "NewsListPage"),
    route("news-detail", "/news/{slug}", "NewsDetailPage"),
    route("announcements", "/announcements", "AnnouncementsPage"),
    route("marketplace", "/marketplace", "MarketplacePage"),
    route("marketplace-item", "/marketplace/{slug}", "MarketplaceItemPage"),
    route("transparency", "/transparency", "TransparencyPage"),
    route("whitepaper", "/whitepaper", "WhitepaperPage"),
    route("roadmap", "/roadmap", "RoadmapPage"),
    route("faq", "/faq", "FAQPage"),
    route("terms", "/terms", "TermsPage"),
    route("privacy", "/privacy", "PrivacyPage"),
    route("dao", "/dao", "DaoPage"),
    route("dao-how-it-works", "/dao/how-it-works", "DaoHowItWorksPage"),
    route("dao-proposals", "/dao/proposals", "DaoProposalsPage"),
    route("public-profile", "/u/{username}", "PublicProfilePage"),
    route("verify-email", "/verify-email", "VerifyEmailPage"),

    # Auth pages (minimal chrome)
    route("signin", "/signin", "SignInPage", auth_page=True),
    route("signup", "/signup", "SignUpPage", auth_page=True),
    route("forgot-password", "/forgot-password", "ForgotPasswordPage", auth_page=True),
    route("reset-password", "/reset-password", "ResetPasswordPage", auth_page=True),
    route("auth-callback", "/auth/callback", "AuthCallbackPage", auth_page=True),
    route("admin-login", "/admin/login", "AdminLoginPage", auth_page=True),

    # Member area
    route("member-dashboard", MEMBER_HOME_PATH, "MemberDashboardPage", _member),
    route("member-profile", "/member/profile", "MemberProfilePage", _member),
    route("member-settings", "/member/settings", "MemberSettingsPage", _member),
    route("member-referral", "/member/referral", "MemberReferralPage", _member),
    route("member-team", "/member/team", "MemberTeamPage", _member),
    route("member-invoices", "/member/invoices", "MemberInvoicesPage", _member),
    route("member-vendor", "/member/vendor", "MemberVendorPage", _member),
    # Verified but not yet complete: must not require completeness itself
    route("complete-profile", "/member/complete-profile", "CompleteProfilePage", RequireVerified()),

    # Moderator tools in the member area
    route("member-news", "/member/news", "MemberNewsPage", _member, _moderator),
    route("member-news-new", "/member/news/new", "MemberNewsEditorPage", _member, _moderator),
    route("member-news-edit", "/member/news/{id}/edit", "MemberNewsEditorPage", _member, _moderator),

    # Admin console
    route("admin", "/admin", "AdminHomePage", *_admin),
    route("admin-control", "/admin/control", "AdminControlPage", *_admin),
    route("admin-members", "/admin/members", "AdminMembersPage", *_admin),
    route("admin-member-detail", "/admin/members/{id}", "AdminMemberDetailPage", *_admin),
    route("admin-news", "/admin/news", "NewsAdminListPage", *_admin),
    route("admin-news-new", "/admin/news/new", "NewsEditorPage", *_admin),
    route("admin-news-edit", "/admin/news/{id}/edit", "NewsEditorPage", *_admin),
    route("admin-announcements", "/admin/announcements", "AdminAnnouncementsPage", *_admin),
    route("admin-settings", "/admin/settings", "AdminSettingsPage", *_admin),
    route("admin-vendors", "/admin/vendors", "AdminVendorsPage", *_admin),
    route("admin-audit", "/admin/audit", "AdminAuditPage", *_admin),
]


class RouteTable:
    """
    Ordered, read-only view over a list of route descriptors.

    Precedence: dynamic patterns (literal after a parameter), then
    prefix captures, then exact paths. Within a tier, more literal
    segments win, then more segments, then declaration order.
    """

    def __init__(self, routes: Iterable[RouteDescriptor], home: str = HOME_ROUTE):
        self._routes = tuple(routes)
        self._by_name: dict[str, RouteDescriptor] = {}
        templates: dict[str, str] = {}

        for descriptor in self._routes:
            if descriptor.name in self._by_name:
                raise DuplicateRouteError(f"Duplicate route name: {descriptor.name}")
            template = descriptor.pattern.template
            if template in templates:
                raise DuplicateRouteError(
                    f"Routes {templates[template]} and {descriptor.name} share pattern {template}"
                )
            self._by_name[descriptor.name] = descriptor
            templates[template] = descriptor.name

        if home not in self._by_name:
            raise RouteNotFoundError(home)
        self._home = self._by_name[home]

        index = {d.name: i for i, d in enumerate(self._routes)}
        self._ordered = tuple(sorted(self._routes, key=lambda d: (*self._rank(d), index[d.name])))

    @staticmethod
    def _rank(descriptor: RouteDescriptor) -> tuple[int, int, int]:
        pattern = descriptor.pattern
        return (int(pattern.tier), -pattern.literal_count, -len(pattern.segments))

    @property
    def routes(self) -> tuple[RouteDescriptor, ...]:
        """Routes in declaration order."""
        return self._routes

    @property
    def ordered(self) -> tuple[RouteDescriptor, ...]:
        """Routes in match order."""
        return self._ordered

    @property
    def home(self) -> RouteDescriptor:
        return self._home

    def get(self, name: str) -> RouteDescriptor:
        try:
            return self._by_name[name]
        except KeyError:
            raise RouteNotFoundError(name)

    def matches(self, residual_path: str) -> list[tuple[RouteDescriptor, dict[str, str]]]:
        """Every route matching a residual path, in match order."""
        found = []
        for descriptor in self._ordered:
            params = descriptor.pattern.match(residual_path)
            if params is not None:
                found.append((descriptor, params))
        return found

    def first_match(self, residual_path: str) -> Optional[tuple[RouteDescriptor, dict[str, str]]]:
        for descriptor in self._ordered:
            params = descriptor.pattern.match(residual_path)
            if params is not None:
                return descriptor, params
        return None

    def check_consistency(self, samples: Optional[Iterable[str]] = None) -> list[str]:
        """
        Report ambiguous or shadowed patterns.

        A sample path is ambiguous when two matching routes rank equally,
        so only declaration order separates them. A route is shadowed
        when its own example path dispatches elsewhere. Every route's
        example path is always checked; extra samples can be supplied.

        Returns a list of problems; empty means consistent.
        """
        problems: list[str] = []

        for descriptor in self._routes:
            example = descriptor.pattern.example()
            winner = self.first_match(example)
            if winner is None or winner[0].name != descriptor.name:
                other = winner[0].name if winner else "nothing"
                problems.append(f"{descriptor.name}: example {example} dispatches to {other}")

        paths = [d.pattern.example() for d in self._routes]
        paths.extend(samples or [])
        for path in paths:
            found = self.matches(path)
            for (first, _), (second, _) in zip(found, found[1:]):
                if self._rank(first) == self._rank(second):
                    problems.append(
                        f"{path}: {first.name} and {second.name} match with equal precedence"
                    )

        for problem in problems:
            logger.warning(f"Route table: {problem}")
        return problems


_table: Optional[RouteTable] = None


def get_route_table() -> RouteTable:
    """Get the site's route table."""
    global _table
    if _table is None:
        _table = RouteTable(ROUTES)
    return _table

"""
TPC Portal - resolve a URL the way the site does.

Runs the navigation and access-control pipeline against an in-memory
scenario (signed in or not, verified, profile complete, role, admin
allow-list, maintenance) and prints what the page would show.

    python main.py /member/dashboard --signed-in --verified --complete
    python main.py /en/admin/control --signed-in --role admin --admin-listed
    python main.py /home --maintenance
    python main.py --routes
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from core.display import console, print_routes, print_view
from core.models import SiteView
from core.runtime import SiteRuntime
from modules.app_settings import AppSettings, StaticSettingsProvider
from modules.auth import InMemorySessionProvider, Profile, SessionUser, StaticAdminAllowList
from modules.i18n import InMemoryPreferenceStore, Language, LanguagePreference, PREFERENCE_KEY
from modules.routing import get_route_table
from shared.config import get_settings

SCENARIO_USER_ID = "00000000-0000-0000-0000-000000000001"


def build_runtime(args: argparse.Namespace) -> SiteRuntime:
    """Build a runtime wired to in-memory providers for the CLI flags."""
    user = None
    profiles: dict[str, Profile] = {}
    if args.signed_in:
        user = SessionUser(id=SCENARIO_USER_ID, email="member@example.com", email_verified=args.verified)
        filled = "x" if args.complete else None
        profiles[SCENARIO_USER_ID] = Profile(
            id=SCENARIO_USER_ID,
            role=args.role,
            email_verified=args.verified,
            full_name=filled,
            phone=filled,
            telegram=filled,
            city=filled,
        )

    settings = get_settings()
    default = Language.parse(settings.default_language) or Language.EN
    store = InMemoryPreferenceStore({PREFERENCE_KEY: args.lang} if args.lang else None)

    return SiteRuntime(
        sessions=InMemorySessionProvider(user, profiles),
        settings=StaticSettingsProvider(AppSettings(maintenance_mode=args.maintenance)),
        allow_list=StaticAdminAllowList([SCENARIO_USER_ID] if args.admin_listed else []),
        preference=LanguagePreference(store, default),
        initial_url=args.path,
    )


async def resolve(args: argparse.Namespace) -> Optional[SiteView]:
    """Start the runtime, let every fetch finish and return the final view."""
    runtime = build_runtime(args)
    await runtime.start()
    view = await runtime.settle()
    runtime.stop()
    return view


def main(args: argparse.Namespace) -> int:
    if args.routes:
        print_routes(get_route_table())
        return 0

    if not args.path:
        console.print("[red]Error:[/red] A path is required (or use --routes)")
        return 1

    view = asyncio.run(resolve(args))
    if view is None:
        console.print(f"[red]Error:[/red] Could not resolve {args.path}")
        return 1

    print_view(view)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Resolve a URL through the TPC portal navigation and access-control pipeline"
    )
    parser.add_argument("path", nargs="?", help="URL to resolve, e.g. /member/dashboard")
    parser.add_argument("--signed-in", action="store_true", help="Resolve with a signed-in user")
    parser.add_argument("--verified", action="store_true", help="The user's email is verified")
    parser.add_argument("--complete", action="store_true", help="The user's profile is complete")
    parser.add_argument("--role", default="member", help="The user's role (default: member)")
    parser.add_argument("--admin-listed", action="store_true", help="The user is on the admin allow-list")
    parser.add_argument("--maintenance", action="store_true", help="Maintenance mode is on")
    parser.add_argument(
        "--lang",
        choices=[lang.value for lang in Language],
        help="Stored language preference (fallback for unprefixed paths)",
    )
    parser.add_argument("--routes", action="store_true", help="List the route table and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(main(args))

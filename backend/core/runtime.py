"""Site runtime: the navigation and access-control state machine.

Ties the pieces together on one asyncio event loop:

    history -> ClientNavigator -> PathNormalizer -> current path
    current path -> RouteDispatcher -> GateChain -> ShellComposer -> SiteView

State changes come from three places: navigation events, completion of
session/profile/settings/allow-list fetches, and language switches.
Each navigation or session change issues a new liveness token; a fetch
that completes under an old token is discarded without touching state.
"""

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

from modules.access import (
    AllowListState,
    GateChain,
    GateContext,
    LoadStatus,
    MaintenanceGate,
    MaintenanceState,
    ProfileState,
    RenderKind,
    SessionState,
    needs_allow_list,
    needs_profile,
)
from modules.app_settings import ISettingsProvider, get_settings_provider
from modules.auth import (
    IAdminAllowList,
    ISessionProvider,
    SessionUser,
    get_admin_allow_list,
    get_session_provider,
)
from modules.i18n import (
    DEFAULT_LANGUAGE,
    Language,
    LanguagePreference,
    get_language_preference,
    language_of,
    strip_language,
)
from modules.navigation import BrowserHistory, ClientNavigator, IHistory, ObservableView, PathNormalizer
from modules.routing import RouteDispatcher, RouteMatch, get_route_dispatcher
from modules.shell import ShellComposer
from shared.config import get_settings

from .models import RELOAD_PROMPT, SiteView

logger = logging.getLogger(__name__)

ViewListener = Callable[[SiteView], None]


class SiteRuntime:
    """Top-level dispatcher for one page session.

    Usage:
        runtime = SiteRuntime(initial_url="/member/dashboard")
        await runtime.start()
        runtime.navigator.navigate("/en/news")
        await runtime.settle()
        runtime.current_view
    """

    def __init__(
        self,
        sessions: Optional[ISessionProvider] = None,
        settings: Optional[ISettingsProvider] = None,
        allow_list: Optional[IAdminAllowList] = None,
        history: Optional[IHistory] = None,
        preference: Optional[LanguagePreference] = None,
        dispatcher: Optional[RouteDispatcher] = None,
        chain: Optional[GateChain] = None,
        composer: Optional[ShellComposer] = None,
        initial_url: str = "/",
    ):
        self._sessions = sessions or get_session_provider()
        self._settings = settings or get_settings_provider()
        self._allow_list = allow_list or get_admin_allow_list()
        self._history = history or BrowserHistory(initial_url)
        self._preference = preference or get_language_preference()
        self._dispatcher = dispatcher or get_route_dispatcher()
        self._chain = chain or GateChain(
            MaintenanceGate(fail_closed=get_settings().maintenance_fail_closed)
        )
        self._composer = composer or ShellComposer()

        self._navigator: Optional[ClientNavigator] = None
        self._normalizer: Optional[PathNormalizer] = None

        self._session = SessionState.loading()
        self._profile = ProfileState()
        self._maintenance = MaintenanceState()
        self._allow = AllowListState()
        self._match: Optional[RouteMatch] = None

        self._token = 0
        self._session_epoch = 0
        self._tasks: set[asyncio.Task] = set()
        self._view: Optional[SiteView] = None
        self._view_listeners: list[ViewListener] = []
        self._unsubscribers: list[Callable[[], None]] = []
        self._started = False

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    @property
    def navigator(self) -> ClientNavigator:
        if self._navigator is None:
            raise RuntimeError("SiteRuntime.start() has not been called")
        return self._navigator

    @property
    def current_path(self) -> ObservableView[Optional[str]]:
        if self._normalizer is None:
            raise RuntimeError("SiteRuntime.start() has not been called")
        return self._normalizer.current_path

    @property
    def current_view(self) -> Optional[SiteView]:
        return self._view

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def profile(self) -> ProfileState:
        return self._profile

    @property
    def maintenance(self) -> MaintenanceState:
        return self._maintenance

    @property
    def allow_list(self) -> AllowListState:
        return self._allow

    @property
    def pending(self) -> int:
        """Number of fetches still in flight."""
        return len(self._tasks)

    def on_view(self, listener: ViewListener) -> Callable[[], None]:
        """Register for view changes. Returns a function that removes it."""
        self._view_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._view_listeners:
                self._view_listeners.remove(listener)

        return unsubscribe

    async def start(self) -> Optional[SiteView]:
        """
        Boot the runtime.

        Reads the language preference once, normalizes the initial
        location, then loads settings and session concurrently.

        Returns:
            The view once settings and session have answered
        """
        if self._started:
            return self._view
        self._started = True

        fallback = self._preference.get_preferred()
        self._navigator = ClientNavigator(self._history, self._preference)
        self._normalizer = PathNormalizer(self._navigator, fallback)

        self._unsubscribers.append(self._normalizer.current_path.subscribe(self._on_path))
        self._unsubscribers.append(self._sessions.on_session_change(self._on_session_change))
        self._normalizer.start()

        await asyncio.gather(self._load_settings(), self._load_session())
        return self._view

    def stop(self) -> None:
        """Tear down: drop subscriptions and discard every pending fetch."""
        self._token += 1
        self._session_epoch += 1
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        if self._normalizer is not None:
            self._normalizer.stop()
        for task in list(self._tasks):
            task.cancel()
        self._started = False

    async def settle(self) -> Optional[SiteView]:
        """Wait until no fetch is in flight, then return the view."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        return self._view

    async def refresh_profile(self) -> None:
        """Refetch the profile after it was changed elsewhere in the app."""
        user = self._session.user
        if user is None:
            return
        await self._spawn(self._fetch_profile(user.id, self._token))

    def switch_language(self, lang: Language) -> bool:
        """Show the current page in another language."""
        return self.navigator.switch_language(lang, self.current_path.value)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_path(self, path: Optional[str]) -> None:
        if path is None:
            return
        self._supersede()
        self._match = self._dispatcher.dispatch(strip_language(path))
        self._schedule_fetches()
        self._render()

    def _on_session_change(self, user: Optional[SessionUser]) -> None:
        logger.debug(f"Session changed: {'signed in' if user else 'signed out'}")
        self._session_epoch += 1
        self._apply_session(SessionState.present(user) if user else SessionState.absent())

    def _apply_session(self, session: SessionState) -> None:
        previous = self._session.user.id if self._session.user else None
        current = session.user.id if session.user else None
        self._session = session
        if previous != current or session.user is None:
            self._profile = ProfileState()
            self._allow = AllowListState()
        self._supersede()
        self._schedule_fetches()
        self._render()

    # ------------------------------------------------------------------
    # Fetches
    # ------------------------------------------------------------------

    async def _load_settings(self) -> None:
        try:
            settings = await self._settings.get_app_settings()
            self._maintenance = MaintenanceState(status=LoadStatus.READY, settings=settings)
        except Exception as e:
            logger.warning(f"Maintenance settings unavailable: {e}")
            self._maintenance = MaintenanceState(status=LoadStatus.FAILED)
        if self._started:
            self._render()

    async def _load_session(self) -> None:
        epoch = self._session_epoch
        try:
            user = await self._sessions.get_session()
        except Exception as e:
            logger.warning(f"Session lookup failed, treating as signed out: {e}")
            user = None
        if epoch != self._session_epoch or not self._started:
            logger.debug("Discarding initial session lookup superseded by a session change")
            return
        self._apply_session(SessionState.present(user) if user else SessionState.absent())

    def _schedule_fetches(self) -> None:
        user = self._session.user
        if user is None or self._match is None:
            return
        requirements = self._match.route.requirements
        if needs_profile(requirements) and self._profile.status == LoadStatus.LOADING:
            self._spawn(self._fetch_profile(user.id, self._token))
        if needs_allow_list(requirements) and self._allow.status == LoadStatus.LOADING:
            self._spawn(self._fetch_allow_list(user.id, self._token))

    async def _fetch_profile(self, user_id: str, token: int) -> None:
        try:
            state = ProfileState.from_result(await self._sessions.get_profile(user_id))
        except Exception as e:
            logger.warning(f"Profile lookup failed for {user_id}: {e}")
            state = ProfileState(status=LoadStatus.FAILED)

        if not self._is_live(token, user_id):
            logger.debug(f"Discarding stale profile result for {user_id}")
            return
        self._profile = state
        self._render()

    async def _fetch_allow_list(self, user_id: str, token: int) -> None:
        try:
            allowed = await self._allow_list.is_admin(user_id)
            state = AllowListState(status=LoadStatus.READY, allowed=allowed)
        except Exception as e:
            logger.warning(f"Admin allow-list lookup failed for {user_id}: {e}")
            state = AllowListState(status=LoadStatus.FAILED)

        if not self._is_live(token, user_id):
            logger.debug(f"Discarding stale allow-list result for {user_id}")
            return
        self._allow = state
        self._render()

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _supersede(self) -> None:
        self._token += 1

    def _is_live(self, token: int, user_id: str) -> bool:
        user = self._session.user
        return self._started and token == self._token and user is not None and user.id == user_id

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self) -> None:
        if self._normalizer is None or self._match is None:
            return
        path = self._normalizer.current_path.value
        if path is None:
            return

        try:
            view = self._compose(path, self._match)
        except Exception:
            # Last resort for faults in composition; authorization outcomes never get here
            logger.exception(f"Failed to compose view for {path}")
            view = SiteView(
                canonical_path=path,
                language=language_of(path) or DEFAULT_LANGUAGE,
                shell=self._composer.error(),
                error=RELOAD_PROMPT,
            )

        if view == self._view:
            return
        self._view = view
        for listener in list(self._view_listeners):
            listener(view)

        decision = view.decision
        if decision is not None and decision.render == RenderKind.REDIRECT and decision.redirect_to:
            if decision.redirect_to != path:
                logger.debug(f"Redirecting {path} to {decision.redirect_to}")
                self.navigator.redirect(decision.redirect_to)

    def _compose(self, path: str, match: RouteMatch) -> SiteView:
        language = language_of(path) or DEFAULT_LANGUAGE
        ctx = GateContext(
            canonical_path=path,
            residual_path=match.residual_path,
            language=language,
            session=self._session,
            profile=self._profile,
            maintenance=self._maintenance,
            allow_list=self._allow,
        )
        decision = self._chain.evaluate(ctx, match.route.requirements)
        return SiteView(
            canonical_path=path,
            language=language,
            route=match.route.name,
            page=match.route.page,
            params=dict(match.params),
            fallback=match.fallback,
            decision=decision,
            shell=self._composer.compose(path, match, decision),
        )

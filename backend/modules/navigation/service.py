"""
Client Navigator.

Moves between in-app pages by updating the session history without a
full reload and broadcasting a NavigationEvent to every subscriber.
Back/forward traversal is broadcast the same way.
"""

import logging
import re
from collections import deque
from typing import Callable, Optional

from modules.i18n import (
    Language,
    LanguagePreference,
    language_of,
    strip_language,
    with_language,
)

from .interfaces import IHistory, Unsubscribe
from .models import Location, NavigationEvent, NavigationKind, split_url

logger = logging.getLogger(__name__)

NavigationListener = Callable[[NavigationEvent], None]

_EXTERNAL_URL = re.compile(r"^(https?://|mailto:|tel:)", re.IGNORECASE)


def is_external(url: str) -> bool:
    """True for URLs that leave the app (other origins, mail, phone)."""
    return bool(_EXTERNAL_URL.match(url))


class ClientNavigator:
    """
    Owns the navigation event channel.

    Events are delivered in the order they were emitted. An event emitted
    from inside a listener is queued and delivered once the current event
    has reached every listener.
    """

    def __init__(self, history: IHistory, preference: LanguagePreference):
        self._history = history
        self._preference = preference
        self._listeners: list[NavigationListener] = []
        self._pending: deque[NavigationEvent] = deque()
        self._delivering = False
        self._history.on_pop_state(self._on_pop_state)

    @property
    def history(self) -> IHistory:
        return self._history

    @property
    def location(self) -> Location:
        return self._history.location

    @property
    def default_language(self) -> Language:
        return self._preference.default

    def on_navigate(self, listener: NavigationListener) -> Unsubscribe:
        """Register a navigation listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: NavigationKind) -> None:
        """Broadcast the current location to every listener."""
        self._pending.append(NavigationEvent(location=self._history.location, kind=kind))
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._pending:
                event = self._pending.popleft()
                for listener in list(self._listeners):
                    listener(event)
        finally:
            self._delivering = False

    def navigate(self, target: str) -> bool:
        """
        Go to an in-app URL without reloading.

        External URLs are handed to the host for a full page load.

        Returns:
            True if the navigation stayed inside the app
        """
        if is_external(target):
            self._history.assign(target)
            return False

        self._history.push_state(target)
        self.emit(NavigationKind.PUSH)
        return True

    def redirect(self, target: str) -> None:
        """Replace the current entry with `target` (no new history entry)."""
        self._history.replace_state(target)
        self.emit(NavigationKind.REPLACE)

    def switch_language(self, lang: Language, current_path: Optional[str] = None) -> bool:
        """
        Show the current page in another language.

        Persists the choice and navigates only when the language-switched
        path differs from where the user already is.

        Returns:
            True if a navigation happened
        """
        current = current_path or self._history.location.pathname
        target = with_language(lang, strip_language(current))
        self._preference.set_preferred(lang)

        if target in (current, self._history.location.pathname):
            return False
        return self.navigate(target)

    def _on_pop_state(self, location: Location) -> None:
        self.emit(NavigationKind.POP)


class Link:
    """
    In-app link primitive.

    Every internal href goes through a Link so that activating it updates
    the history instead of reloading the page. Targets without a language
    prefix stay in the language of the current page.
    """

    def __init__(
        self,
        navigator: ClientNavigator,
        href: str,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.href = href
        self._navigator = navigator
        self._on_click = on_click

    def resolve(self) -> str:
        """The canonical URL this link points at."""
        if is_external(self.href):
            return self.href
        target = split_url(self.href)
        if language_of(target.pathname) is not None:
            return target.href
        lang = language_of(self._navigator.location.pathname) or self._navigator.default_language
        return f"{with_language(lang, target.pathname)}{target.search}{target.hash}"

    def activate(
        self,
        meta: bool = False,
        ctrl: bool = False,
        shift: bool = False,
        alt: bool = False,
    ) -> bool:
        """
        Handle a click on the link.

        Returns:
            True if the browser's default behavior was replaced
        """
        if meta or ctrl or shift or alt:
            # New tab/window: leave it to the browser
            return False
        if is_external(self.href):
            return False

        target = self.resolve()
        if target != self._navigator.location.href:
            self._navigator.navigate(target)
        else:
            logger.debug(f"Link target {target} is already current")

        if self._on_click is not None:
            self._on_click()
        return True

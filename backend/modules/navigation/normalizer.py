"""
Path Normalizer.

Runs on every navigation event, before dispatch, and rewrites the
observed path into its canonical language-prefixed form:

1. "/" or ""              -> /{fallback}/home
2. no recognized language -> /{fallback}{path}
3. otherwise              -> unchanged

A rewrite replaces the current history entry in place, so the canonical
URL is what the user sees, bookmarks and shares.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from modules.i18n import Language, HOME_PATH, language_of, with_language

from .models import NavigationEvent, NavigationKind
from .observable import Observable, ObservableView
from .service import ClientNavigator

logger = logging.getLogger(__name__)


class NormalizedPath(BaseModel):
    """Result of normalizing one observed path."""

    pathname: str
    language: Language
    rewritten: bool

    model_config = {"frozen": True}


def normalize_path(pathname: str, fallback: Language) -> NormalizedPath:
    """
    Canonicalize a path.

    Two-letter prefixes outside the language set are ordinary residual
    text: "/xx/foo" becomes "/{fallback}/xx/foo".
    """
    if pathname in ("", "/"):
        canonical = with_language(fallback, HOME_PATH)
    elif language_of(pathname) is None:
        canonical = with_language(fallback, pathname)
    else:
        canonical = pathname

    return NormalizedPath(
        pathname=canonical,
        language=language_of(canonical),
        rewritten=canonical != pathname,
    )


class PathNormalizer:
    """
    Owns the tracked current path.

    Only the normalizer writes the current path; every other component
    subscribes to `current_path`, so nothing downstream ever observes a
    non-canonical path.
    """

    def __init__(self, navigator: ClientNavigator, fallback: Language):
        self._navigator = navigator
        self._fallback = fallback
        self._current: Observable[Optional[str]] = Observable(None)
        self._unsubscribe = None

    @property
    def fallback(self) -> Language:
        return self._fallback

    @property
    def current_path(self) -> ObservableView[Optional[str]]:
        return self._current.view()

    def start(self) -> None:
        """Subscribe to navigation and normalize the initial location."""
        if self._unsubscribe is None:
            self._unsubscribe = self._navigator.on_navigate(self._on_navigate)
        self._normalize_current()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_navigate(self, event: NavigationEvent) -> None:
        self._normalize_current()

    def _normalize_current(self) -> None:
        history = self._navigator.history
        location = history.location
        result = normalize_path(location.pathname, self._fallback)

        if not result.rewritten:
            self._current.set(result.pathname)
            return

        logger.debug(f"Rewriting {location.pathname!r} to {result.pathname!r}")
        history.replace_state(f"{result.pathname}{location.search}{location.hash}")
        self._current.set(result.pathname)
        self._navigator.emit(NavigationKind.REPLACE)

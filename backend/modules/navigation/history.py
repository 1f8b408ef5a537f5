"""
In-process session history.

Models the browser's history stack: push/replace without reloading,
back/forward traversal that fires pop-state listeners, and full page
loads for URLs that leave the app.
"""

import logging
from typing import Callable

from .interfaces import IHistory, Unsubscribe
from .models import Location, split_url

logger = logging.getLogger(__name__)


class BrowserHistory(IHistory):
    """Session history with a movable cursor."""

    def __init__(self, initial_url: str = "/"):
        self._entries: list[Location] = [split_url(initial_url)]
        self._index = 0
        self._pop_listeners: list[Callable[[Location], None]] = []
        self.full_loads: list[str] = []

    @property
    def location(self) -> Location:
        return self._entries[self._index]

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[Location]:
        return list(self._entries)

    def push_state(self, url: str) -> None:
        # Pushing discards any forward entries
        del self._entries[self._index + 1:]
        self._entries.append(split_url(url))
        self._index += 1

    def replace_state(self, url: str) -> None:
        self._entries[self._index] = split_url(url)

    def go(self, delta: int) -> None:
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return
        self._index = target
        location = self.location
        for listener in list(self._pop_listeners):
            listener(location)

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def on_pop_state(self, listener: Callable[[Location], None]) -> Unsubscribe:
        self._pop_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._pop_listeners:
                self._pop_listeners.remove(listener)

        return unsubscribe

    def assign(self, url: str) -> None:
        logger.debug(f"Full page load requested for {url}")
        self.full_loads.append(url)

"""
Navigation module interface.

IHistory is the slice of the host environment the navigator needs:
the session history and a way to trigger a full page load.
"""

from typing import Callable, Protocol, runtime_checkable

from .models import Location

Unsubscribe = Callable[[], None]


@runtime_checkable
class IHistory(Protocol):
    """Host session history."""

    @property
    def location(self) -> Location:
        """The current address."""
        ...

    def push_state(self, url: str) -> None:
        """Add a new entry without reloading."""
        ...

    def replace_state(self, url: str) -> None:
        """Rewrite the current entry in place without reloading."""
        ...

    def on_pop_state(self, listener: Callable[[Location], None]) -> Unsubscribe:
        """Register for back/forward traversal."""
        ...

    def assign(self, url: str) -> None:
        """Leave the app with a full page load."""
        ...

"""
Single-value observable.

The owner keeps the Observable and writes it; everybody else gets an
ObservableView, which can only be read and subscribed to.
"""

from typing import Callable, Generic, TypeVar

from .interfaces import Unsubscribe

T = TypeVar("T")


class Observable(Generic[T]):
    """A value that notifies subscribers when it changes."""

    def __init__(self, value: T):
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """
        Update the value.

        Returns:
            True if the value changed and subscribers were notified
        """
        if value == self._value:
            return False
        self._value = value
        for subscriber in list(self._subscribers):
            subscriber(value)
        return True

    def subscribe(self, subscriber: Callable[[T], None]) -> Unsubscribe:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def view(self) -> "ObservableView[T]":
        return ObservableView(self)


class ObservableView(Generic[T]):
    """Read-only access to an Observable."""

    def __init__(self, source: Observable[T]):
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, subscriber: Callable[[T], None]) -> Unsubscribe:
        return self._source.subscribe(subscriber)

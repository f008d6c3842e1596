"""Public observable value contract."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class Observable(Protocol[T]):
    """Value holder notifying listeners on change."""

    def get(self) -> T:
        """Return current value."""

    def set(self, value: T) -> None:
        """Replace value, notifying listeners when it differs."""

    def on_change(self, listener: Callable[[T, T], None]) -> Unsubscribe:
        """Register ``listener(new, old)`` and return its remover."""


def create_observable(initial: T) -> Observable[T]:
    """Create default observable implementation."""
    from graphstate.runtime.observable import RuntimeObservable

    return RuntimeObservable(initial)

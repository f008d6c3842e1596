"""Observable value holder."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from graphstate.api.observable import Unsubscribe

_LOG = logging.getLogger("graphstate.observable")

T = TypeVar("T")


class RuntimeObservable(Generic[T]):
    """Value holder that notifies ``listener(new, old)`` when the value changes."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: dict[int, Callable[[T, T], None]] = {}
        self._next_token = 1

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        old = self._value
        self._value = value
        if old == value:
            return
        for token, listener in tuple(self._listeners.items()):
            try:
                listener(value, old)
            except Exception:
                _LOG.exception("observable_listener_failed token=%d", token)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def on_change(self, listener: Callable[[T, T], None]) -> Unsubscribe:
        token = self._next_token
        self._next_token += 1
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


Observable = RuntimeObservable

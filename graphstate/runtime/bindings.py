"""Binding adapters for UI components.

Components never hold the managers directly. They subscribe on mount, keep
the returned tokens and release them on unmount; subscriptions are not
garbage collected, so a component that skips ``unmount`` keeps receiving
events.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any, TypeVar

from graphstate.api.events import (
    NO_CONTEXT,
    Event,
    EventBus,
    EventCallback,
    EventFilter,
    PublishResult,
    Subscription,
)
from graphstate.api.history import (
    REDO_CHANGED,
    UNDO_CHANGED,
    HistoryAvailability,
    HistoryManager,
)
from graphstate.api.selection import SELECTION_CHANGED, SelectionManager, SelectionSnapshot
from graphstate.runtime.observable import RuntimeObservable

T = TypeVar("T")


class ComponentBindings:
    """Subscriptions owned by one mounted component."""

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._subscriptions: list[Subscription] = []

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        return tuple(self._subscriptions)

    def subscribe(
        self,
        pattern: str,
        callback: EventCallback,
        *,
        priority: int = 0,
        once: bool = False,
        filter: EventFilter | None = None,
        context: object = NO_CONTEXT,
    ) -> Subscription:
        subscription = self._bus.subscribe(
            pattern,
            callback,
            priority=priority,
            once=once,
            filter=filter,
            context=context,
        )
        self._subscriptions.append(subscription)
        return subscription

    def publish(
        self,
        name: str,
        payload: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> PublishResult:
        return self._bus.publish(name, payload, metadata)

    def unmount(self) -> int:
        """Release every subscription; returns how many were still registered."""
        removed = 0
        for subscription in self._subscriptions:
            if self._bus.unsubscribe(subscription):
                removed += 1
        self._subscriptions.clear()
        return removed

    def __enter__(self) -> ComponentBindings:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unmount()


class EventObservable(RuntimeObservable[T]):
    """Observable fed by events matching one pattern."""

    def __init__(
        self,
        bus: EventBus,
        pattern: str,
        initial: T,
        project: Callable[[Event, T], T],
    ) -> None:
        super().__init__(initial)
        self._bus = bus
        self._project = project
        self._subscription: Subscription | None = bus.subscribe(pattern, self._on_event)

    @property
    def closed(self) -> bool:
        return self._subscription is None

    def close(self) -> None:
        if self._subscription is None:
            return
        self._bus.unsubscribe(self._subscription)
        self._subscription = None

    def _on_event(self, event: Event, bus: object) -> None:
        self.set(self._project(event, self.get()))


def _payload(event: Event, current: object) -> object:
    return dict(event.payload)


def observe_event(
    bus: EventBus,
    pattern: str,
    initial: Any = None,
    project: Callable[[Event, Any], Any] = _payload,
) -> EventObservable[Any]:
    """Observable holding the projection of the latest matching event."""
    return EventObservable(bus, pattern, initial, project)


def _selection_from_event(event: Event, current: SelectionSnapshot) -> SelectionSnapshot:
    selected = event.payload.get("selectedIds", ())
    return SelectionSnapshot(nodes=tuple(selected), edges=current.edges)


def bind_selection(
    bus: EventBus,
    selection: SelectionManager | None = None,
) -> EventObservable[SelectionSnapshot]:
    """Observable selection snapshot, seeded from ``selection`` when given."""
    initial = selection.get_selection() if selection is not None else SelectionSnapshot()
    return EventObservable(bus, SELECTION_CHANGED, initial, _selection_from_event)


def _availability_from_event(event: Event, current: HistoryAvailability) -> HistoryAvailability:
    size = int(event.payload.get("size", 0))
    if event.name == UNDO_CHANGED:
        return replace(current, undo_size=size, can_undo=bool(event.payload.get("canUndo", size > 0)))
    if event.name == REDO_CHANGED:
        return replace(current, redo_size=size, can_redo=bool(event.payload.get("canRedo", size > 0)))
    return current


def bind_history(
    bus: EventBus,
    history: HistoryManager | None = None,
) -> EventObservable[HistoryAvailability]:
    """Observable undo/redo availability, seeded from ``history`` when given."""
    initial = HistoryAvailability()
    if history is not None:
        initial = HistoryAvailability(
            undo_size=len(history.undo_names()),
            can_undo=history.can_undo(),
            redo_size=len(history.redo_names()),
            can_redo=history.can_redo(),
        )
    return EventObservable(bus, "history.*.changed", initial, _availability_from_event)

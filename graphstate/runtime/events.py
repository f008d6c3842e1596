"""Synchronous in-process event bus with wildcard routing."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from graphstate.api.events import (
    EMPTY_PAYLOAD,
    NO_CONTEXT,
    DeliveryError,
    Event,
    EventCallback,
    EventFilter,
    EventMetadata,
    Middleware,
    PublishResult,
    Subscription,
)
from graphstate.runtime.json_codec import event_to_dict
from graphstate.runtime.patterns import SEPARATOR, CompiledPattern, compile_pattern
from graphstate.runtime.ring_buffer import RingBuffer

_LOG = logging.getLogger("graphstate.events")


@dataclass(slots=True)
class _Registration:
    id: int
    pattern: str
    callback: EventCallback
    priority: int
    once: bool
    filter: EventFilter | None
    context: object
    seq: int
    consumed: bool = False

    def invoke(self, event: Event, bus: RuntimeEventBus) -> None:
        if self.context is not NO_CONTEXT:
            self.callback(self.context, event, bus)
        else:
            self.callback(event, bus)


def _is_cancelled(verdict: object) -> bool:
    if verdict is None:
        return False
    if isinstance(verdict, Mapping):
        return bool(verdict.get("cancelled", False))
    return bool(getattr(verdict, "cancelled", False))


class RuntimeEventBus:
    """Pub/sub hub: exact and wildcard patterns, priorities, middleware, history.

    Delivery is synchronous. Each publish snapshots its subscriber list before
    the first callback runs, so callbacks may subscribe, unsubscribe or publish
    again without disturbing the pass in progress.
    """

    def __init__(
        self,
        *,
        max_history_size: int = 100,
        trace_events: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._registry: dict[str, list[_Registration]] = {}
        self._wildcards: dict[str, CompiledPattern] = {}
        self._owners: dict[int, str] = {}
        self._middleware: list[Middleware] = []
        self._history = RingBuffer[Event](capacity=max_history_size)
        self._next_id = 1
        self._next_seq = 0
        self._trace_events = bool(trace_events)
        self._clock = clock

    @property
    def max_history_size(self) -> int:
        return self._history.capacity

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
        """Register ``callback(event, bus)`` for pattern.

        Higher ``priority`` fires first; equal priorities keep registration
        order. With ``context`` the callback is called as
        ``callback(context, event, bus)``.
        """
        registration = _Registration(
            id=self._next_id,
            pattern=pattern,
            callback=callback,
            priority=int(priority),
            once=bool(once),
            filter=filter,
            context=context,
            seq=self._next_seq,
        )
        self._next_id += 1
        self._next_seq += 1
        bucket = self._registry.get(pattern)
        if bucket is None:
            bucket = []
            self._registry[pattern] = bucket
            compiled = compile_pattern(pattern)
            if compiled.is_wildcard:
                self._wildcards[pattern] = compiled
        index = len(bucket)
        for position, existing in enumerate(bucket):
            if existing.priority < registration.priority:
                index = position
                break
        bucket.insert(index, registration)
        self._owners[registration.id] = pattern
        return Subscription(id=registration.id, pattern=pattern)

    def subscribe_once(
        self,
        pattern: str,
        callback: EventCallback,
        *,
        priority: int = 0,
        filter: EventFilter | None = None,
        context: object = NO_CONTEXT,
    ) -> Subscription:
        return self.subscribe(
            pattern,
            callback,
            priority=priority,
            once=True,
            filter=filter,
            context=context,
        )

    def unsubscribe(self, target: Subscription | int | str) -> bool:
        """Remove a subscription by token/id, or registrations by pattern.

        A pattern string that is not itself registered is used as a wildcard
        and removes every registered pattern it matches.
        """
        if isinstance(target, Subscription):
            return self._remove_by_id(target.id)
        if isinstance(target, int):
            return self._remove_by_id(target)
        pattern = str(target)
        if pattern in self._registry:
            self._drop_pattern(pattern)
            return True
        compiled = compile_pattern(pattern)
        doomed = [registered for registered in self._registry if compiled.matches(registered)]
        for registered in doomed:
            self._drop_pattern(registered)
        return bool(doomed)

    def use(self, middleware: Middleware) -> None:
        self._middleware.append(middleware)

    def publish(
        self,
        name: str,
        payload: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> PublishResult:
        """Publish one event and return the delivery report.

        Subscriber errors are captured in the result. Middleware exceptions
        propagate to the caller.
        """
        event = self._build_event(name, payload, metadata)
        for middleware in tuple(self._middleware):
            if _is_cancelled(middleware(event, self)):
                _LOG.debug("event_publish_cancelled name=%s id=%s", name, event.id)
                return PublishResult(event=event, cancelled=True)

        delivered = 0
        errors: list[DeliveryError] = []
        for registration in self._resolve(name):
            if registration.consumed:
                continue
            try:
                if registration.filter is not None and not registration.filter(event):
                    continue
                if registration.once:
                    registration.consumed = True
                    self._remove_by_id(registration.id)
                registration.invoke(event, self)
            except Exception as exc:
                _LOG.warning(
                    "event_subscriber_failed name=%s subscription=%d pattern=%s",
                    name,
                    registration.id,
                    registration.pattern,
                    exc_info=True,
                )
                errors.append(DeliveryError(subscription_id=registration.id, error=exc))
                continue
            delivered += 1

        self._history.append(event)
        if self._trace_events:
            _LOG.debug(
                "event_published name=%s id=%s delivered=%d errors=%d",
                name,
                event.id,
                delivered,
                len(errors),
                extra={"event": event_to_dict(event)},
            )
        return PublishResult(event=event, delivered=delivered, errors=tuple(errors))

    def get_history(self, name: str | None = None, limit: int | None = None) -> list[Event]:
        """Return recorded events oldest first, filtered by exact name."""
        if name is None:
            return self._history.snapshot(limit=limit)
        return self._history.snapshot(limit=limit, where=lambda event: event.name == name)

    def clear_history(self) -> None:
        self._history.clear()

    def clear(self) -> None:
        """Remove all subscriptions; middleware is kept."""
        self._registry.clear()
        self._wildcards.clear()
        self._owners.clear()

    def patterns(self) -> tuple[str, ...]:
        return tuple(self._registry)

    def subscriber_count(self, pattern: str | None = None) -> int:
        """Return subscriptions registered under pattern, or in total."""
        if pattern is None:
            return len(self._owners)
        return len(self._registry.get(pattern, ()))

    def _resolve(self, name: str) -> tuple[_Registration, ...]:
        selected = list(self._registry.get(name, ()))
        if self._wildcards:
            parts = name.split(SEPARATOR)
            for pattern, compiled in self._wildcards.items():
                if pattern != name and compiled.matches_segments(parts):
                    selected.extend(self._registry[pattern])
        selected.sort(key=lambda registration: (-registration.priority, registration.seq))
        return tuple(selected)

    def _remove_by_id(self, subscription_id: int) -> bool:
        pattern = self._owners.pop(subscription_id, None)
        if pattern is None:
            return False
        bucket = self._registry[pattern]
        bucket[:] = [item for item in bucket if item.id != subscription_id]
        if not bucket:
            self._registry.pop(pattern, None)
            self._wildcards.pop(pattern, None)
        return True

    def _drop_pattern(self, pattern: str) -> None:
        for registration in self._registry.pop(pattern, ()):
            self._owners.pop(registration.id, None)
        self._wildcards.pop(pattern, None)

    def _build_event(
        self,
        name: str,
        payload: Mapping[str, Any] | None,
        metadata: Mapping[str, Any] | None,
    ) -> Event:
        extra = dict(metadata or {})
        event_id = extra.pop("id", None)
        timestamp = extra.pop("timestamp", None)
        correlation_id = extra.pop("correlation_id", None)
        source = extra.pop("source", None)
        return Event(
            id=str(event_id) if event_id is not None else uuid.uuid4().hex,
            name=name,
            payload=MappingProxyType(dict(payload)) if payload else EMPTY_PAYLOAD,
            metadata=EventMetadata(
                timestamp=float(timestamp) if timestamp is not None else float(self._clock()),
                correlation_id=(
                    str(correlation_id) if correlation_id is not None else uuid.uuid4().hex
                ),
                source=None if source is None else str(source),
                extra=MappingProxyType(extra) if extra else EMPTY_PAYLOAD,
            ),
        )


EventBus = RuntimeEventBus

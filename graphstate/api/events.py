"""Public event bus API contracts."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

EMPTY_PAYLOAD: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class EventMetadata:
    """Publish-time metadata attached to every event."""

    timestamp: float
    correlation_id: str
    source: str | None = None
    extra: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable record of something that happened."""

    id: str
    name: str
    payload: Mapping[str, Any]
    metadata: EventMetadata


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int
    pattern: str


@dataclass(frozen=True, slots=True)
class DeliveryError:
    """One subscriber failure captured during a publish."""

    subscription_id: int
    error: Exception


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Outcome of one publish call."""

    event: Event
    delivered: int = 0
    errors: tuple[DeliveryError, ...] = ()
    cancelled: bool = False


@dataclass(frozen=True, slots=True)
class MiddlewareResult:
    """Middleware verdict; ``cancelled`` halts delivery."""

    cancelled: bool = False


CANCEL = MiddlewareResult(cancelled=True)


class _NoContext:
    """Marker for subscriptions registered without a bound context."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_CONTEXT"


NO_CONTEXT = _NoContext()

EventCallback = Callable[..., Any]
EventFilter = Callable[[Event], bool]
Middleware = Callable[[Event, "EventBus"], MiddlewareResult | None]


class EventBus(Protocol):
    """Public in-process pub/sub contract with wildcard routing."""

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
        """Register callback for an exact or wildcard pattern."""

    def subscribe_once(
        self,
        pattern: str,
        callback: EventCallback,
        *,
        priority: int = 0,
        filter: EventFilter | None = None,
        context: object = NO_CONTEXT,
    ) -> Subscription:
        """Register callback consumed by its first delivery attempt."""

    def unsubscribe(self, target: Subscription | int | str) -> bool:
        """Remove one subscription or every registration matching a pattern."""

    def publish(
        self,
        name: str,
        payload: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> PublishResult:
        """Publish event synchronously and report delivery."""

    def use(self, middleware: Middleware) -> None:
        """Append middleware to the pre-delivery chain."""

    def get_history(self, name: str | None = None, limit: int | None = None) -> list[Event]:
        """Return recorded events, oldest first."""

    def clear_history(self) -> None:
        """Drop recorded events."""


def create_event_bus(*, max_history_size: int = 100) -> EventBus:
    """Create default event bus implementation."""
    from graphstate.runtime.events import RuntimeEventBus

    return RuntimeEventBus(max_history_size=max_history_size)

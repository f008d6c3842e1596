from __future__ import annotations

import pytest

from graphstate.api.events import Event
from graphstate.runtime.events import RuntimeEventBus


class EventRecorder:
    """Bus callback collecting delivered events."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def __call__(self, event: Event, bus: object) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [event.name for event in self.events]

    def payloads(self, name: str) -> list[dict[str, object]]:
        return [dict(event.payload) for event in self.events if event.name == name]


@pytest.fixture
def bus() -> RuntimeEventBus:
    return RuntimeEventBus(clock=lambda: 1_700_000_000.0)


@pytest.fixture
def recorder(bus: RuntimeEventBus) -> EventRecorder:
    recorder = EventRecorder()
    bus.subscribe("**", recorder)
    return recorder

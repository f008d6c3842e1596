from __future__ import annotations

from graphstate.api import (
    NOTHING,
    create_event_bus,
    create_history_manager,
    create_observable,
    create_selection_manager,
)
from graphstate.runtime.events import RuntimeEventBus
from graphstate.runtime.history import RuntimeHistoryManager
from graphstate.runtime.observable import RuntimeObservable
from graphstate.runtime.selection import RuntimeSelectionManager


def test_factories_return_runtime_implementations() -> None:
    bus = create_event_bus(max_history_size=5)
    selection = create_selection_manager(bus, max_history_size=4)
    history = create_history_manager(bus, max_history_size=3)

    assert isinstance(bus, RuntimeEventBus)
    assert bus.max_history_size == 5
    assert isinstance(selection, RuntimeSelectionManager)
    assert isinstance(history, RuntimeHistoryManager)
    assert history.undo() is NOTHING
    assert isinstance(create_observable(0), RuntimeObservable)


def test_nothing_sentinel_repr_and_truthiness() -> None:
    assert repr(NOTHING) == "NOTHING"
    assert bool(NOTHING) is False

from __future__ import annotations

from graphstate.api.history import FunctionAction, HistoryAvailability
from graphstate.api.selection import SelectionSnapshot
from graphstate.runtime.bindings import (
    ComponentBindings,
    bind_history,
    bind_selection,
    observe_event,
)
from graphstate.runtime.events import EventBus
from graphstate.runtime.history import HistoryManager
from graphstate.runtime.selection import SelectionManager


def test_component_bindings_unmount_releases_every_subscription(bus: EventBus) -> None:
    seen: list[str] = []
    bindings = ComponentBindings(bus)
    bindings.subscribe("dataset.*", lambda event, _: seen.append(event.name))
    bindings.subscribe("graph.**", lambda event, _: seen.append(event.name))

    bindings.publish("dataset.uploaded", {"datasetId": "d1"})
    removed = bindings.unmount()
    bindings.publish("graph.created")

    assert removed == 2
    assert seen == ["dataset.uploaded"]
    assert bus.subscriber_count() == 0
    assert bindings.subscriptions == ()


def test_component_bindings_context_manager_unmounts(bus: EventBus) -> None:
    with ComponentBindings(bus) as bindings:
        bindings.subscribe("a.b", lambda event, _: None)
        assert bus.subscriber_count() == 1

    assert bus.subscriber_count() == 0


def test_unmount_counts_only_live_subscriptions(bus: EventBus) -> None:
    bindings = ComponentBindings(bus)
    bindings.subscribe("a.b", lambda event, _: None, once=True)
    bindings.subscribe("a.c", lambda event, _: None)
    bus.publish("a.b")

    assert bindings.unmount() == 1


def test_observe_event_tracks_latest_payload(bus: EventBus) -> None:
    status = observe_event(bus, "dataset.uploaded", initial=None)
    seen: list[object] = []
    status.on_change(lambda new, old: seen.append(new))

    bus.publish("dataset.uploaded", {"datasetId": "d1", "rowCount": 10})
    status.close()
    bus.publish("dataset.uploaded", {"datasetId": "d2"})

    assert status.get() == {"datasetId": "d1", "rowCount": 10}
    assert seen == [{"datasetId": "d1", "rowCount": 10}]
    assert status.closed


def test_bind_selection_follows_selection_changed(bus: EventBus) -> None:
    selection = SelectionManager(bus)
    selection.select_node("n1")
    bound = bind_selection(bus, selection)

    assert bound.get() == SelectionSnapshot(nodes=("n1",))
    selection.select_node("n2", multi=True)
    assert bound.get().nodes == ("n1", "n2")
    selection.clear_selection()
    assert bound.get().count == 0


def test_bind_history_tracks_both_stacks(bus: EventBus) -> None:
    history = HistoryManager(bus)
    history.execute(FunctionAction("seed", lambda: None, lambda: None))
    bound = bind_history(bus, history)
    assert bound.get() == HistoryAvailability(undo_size=1, can_undo=True)

    history.undo()
    assert bound.get() == HistoryAvailability(undo_size=0, can_undo=False, redo_size=1, can_redo=True)

    history.clear()
    assert bound.get() == HistoryAvailability()
    bound.close()
    assert bus.subscriber_count() == 0

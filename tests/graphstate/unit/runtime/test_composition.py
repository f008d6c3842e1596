from __future__ import annotations

import pytest

from graphstate.api.events import EventBus
from graphstate.runtime.composition import RuntimeCompositionContainer, build_state_layer
from graphstate.runtime.config import StateLayerConfig
from graphstate.runtime.events import RuntimeEventBus
from graphstate.runtime.history import RuntimeHistoryManager
from graphstate.runtime.selection import RuntimeSelectionManager


def test_build_state_layer_wires_managers_to_one_bus() -> None:
    layer = build_state_layer(StateLayerConfig(event_history_size=7, selection_trace_size=2, undo_limit=3))

    assert isinstance(layer.bus, RuntimeEventBus)
    assert isinstance(layer.selection, RuntimeSelectionManager)
    assert isinstance(layer.history, RuntimeHistoryManager)
    assert layer.bus.max_history_size == 7
    assert layer.history.max_history_size == 3

    layer.bus.publish("graph.node.selected", {"nodeId": "n1"})
    assert layer.selection.get_selection().nodes == ("n1",)


def test_build_state_layer_reads_env_when_no_config(monkeypatch) -> None:
    monkeypatch.setenv("GRAPHSTATE_EVENT_HISTORY_SIZE", "9")
    layer = build_state_layer()
    assert layer.bus.max_history_size == 9


def test_build_state_layer_accepts_bus_override() -> None:
    shared = RuntimeEventBus(max_history_size=4)

    layer = build_state_layer(
        StateLayerConfig(),
        configure=lambda binder: binder.bind_instance(EventBus, shared),
    )

    assert layer.bus is shared
    layer.selection.select_node("n1")
    assert [event.name for event in shared.get_history()] == ["node.selected", "selection.changed"]


def test_build_state_layers_are_independent() -> None:
    first = build_state_layer(StateLayerConfig())
    second = build_state_layer(StateLayerConfig())

    first.selection.select_node("n1")

    assert second.selection.get_selection().count == 0
    assert first.bus is not second.bus


def test_container_resolves_lazily_and_caches() -> None:
    container = RuntimeCompositionContainer()
    calls: list[int] = []
    container.bind_factory("token", lambda resolver: calls.append(1) or object())

    first = container.resolve("token")
    second = container.resolve("token")

    assert first is second
    assert calls == [1]


def test_container_rejects_missing_binding() -> None:
    with pytest.raises(KeyError):
        RuntimeCompositionContainer().resolve("missing")

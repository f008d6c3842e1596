from __future__ import annotations

from graphstate import NOTHING, FunctionAction, StateLayer, build_state_layer
from graphstate.runtime.bindings import ComponentBindings, bind_history, bind_selection
from graphstate.runtime.config import StateLayerConfig


def _layer() -> StateLayer:
    return build_state_layer(StateLayerConfig())


def test_selection_is_undoable_through_history() -> None:
    layer = _layer()

    def select(node_id: str) -> FunctionAction:
        previous = layer.selection.get_selection().nodes
        return FunctionAction(
            f"select:{node_id}",
            lambda: layer.selection.select_node(node_id, source="history"),
            lambda: _restore(layer, previous),
        )

    layer.history.execute(select("n1"))
    layer.history.execute(select("n2"))
    assert layer.selection.get_selection().nodes == ("n2",)

    layer.history.undo()
    assert layer.selection.get_selection().nodes == ("n1",)
    layer.history.redo()
    assert layer.selection.get_selection().nodes == ("n2",)
    layer.history.undo()
    layer.history.undo()
    assert layer.selection.get_selection().count == 0
    assert layer.history.undo() is NOTHING


def _restore(layer: StateLayer, nodes: tuple[str, ...]) -> None:
    layer.selection.clear_selection(source="history")
    for node_id in nodes:
        layer.selection.select_node(node_id, multi=True, source="history")


def test_ui_component_lifecycle_over_domain_events() -> None:
    layer = _layer()
    bound_selection = bind_selection(layer.bus, layer.selection)
    bound_history = bind_history(layer.bus, layer.history)
    uploads: list[str] = []

    panel = ComponentBindings(layer.bus)
    panel.subscribe("dataset.*", lambda event, _: uploads.append(event.payload["datasetId"]))
    panel.publish(
        "dataset.uploaded",
        {"datasetId": "d1", "filename": "assay.csv", "rowCount": 10, "columnCount": 3, "uploaderId": None},
    )
    panel.publish("graph.node.selected", {"nodeId": "n7", "multiSelect": False, "source": "canvas"})
    layer.history.execute(FunctionAction("rename", lambda: None, lambda: None))
    panel.unmount()
    panel.publish("dataset.uploaded", {"datasetId": "d2"})

    assert uploads == ["d1"]
    assert bound_selection.get().nodes == ("n7",)
    assert bound_history.get().can_undo is True
    assert layer.bus.get_history("dataset.uploaded")[-1].payload["datasetId"] == "d2"

    bound_selection.close()
    bound_history.close()

"""Selection state for graph items, republished through the event bus."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from graphstate.api.events import Event, EventBus, Subscription
from graphstate.api.selection import (
    GRAPH_NODE_DESELECTED,
    GRAPH_NODE_SELECTED,
    NODE_DESELECTED,
    NODE_SELECTED,
    SELECTION_CHANGED,
    SelectionSnapshot,
    SelectionTraceEntry,
)
from graphstate.runtime.ring_buffer import RingBuffer

_LOG = logging.getLogger("graphstate.selection")

CLEAR_ALL = "*"


class RuntimeSelectionManager:
    """Owns the selected node/edge sets.

    Node selections arrive either through direct calls or as
    ``graph.node.selected`` / ``graph.node.deselected`` events from UI
    collaborators. Every effective change is republished as ``node.selected``
    / ``node.deselected`` followed by one normalized ``selection.changed``.
    Edges are tracked but no edge operations exist yet.
    """

    def __init__(
        self,
        bus: EventBus,
        *,
        max_history_size: int = 20,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._bus = bus
        self._clock = clock
        # dicts keep insertion order; values unused
        self._nodes: dict[str, None] = {}
        self._edges: dict[str, None] = {}
        self._trace = RingBuffer[SelectionTraceEntry](capacity=max_history_size)
        self._subscriptions: tuple[Subscription, ...] = (
            bus.subscribe(GRAPH_NODE_SELECTED, self._on_graph_node_selected),
            bus.subscribe(GRAPH_NODE_DESELECTED, self._on_graph_node_deselected),
        )

    def select_node(self, node_id: str, *, multi: bool = False, source: str | None = None) -> bool:
        """Select node; without ``multi`` every other node is deselected first.

        Returns whether the node was newly inserted.
        """
        previous = tuple(self._nodes)
        removed = False
        if not multi:
            for other in previous:
                # a node.deselected subscriber may already have removed it
                if other != node_id and other in self._nodes:
                    self._remove_node(other, source)
                    removed = True
        inserted = node_id not in self._nodes
        if inserted:
            self._nodes[node_id] = None
            self._record(node_id, "select")
            self._bus.publish(
                NODE_SELECTED,
                {"nodeId": node_id, "multiSelect": bool(multi), "source": source},
                _metadata(source),
            )
        if inserted or removed:
            self._publish_changed(previous, source)
        return inserted

    def deselect_node(self, node_id: str, *, source: str | None = None) -> bool:
        """Deselect node; returns whether it was selected."""
        if node_id not in self._nodes:
            return False
        previous = tuple(self._nodes)
        self._remove_node(node_id, source)
        self._publish_changed(previous, source)
        return True

    def clear_selection(self, *, source: str | None = None) -> None:
        """Deselect every node; always emits one ``selection.changed``.

        The trace gets one ``clear`` entry after the per-node deselects, also
        when nothing was selected.
        """
        previous = tuple(self._nodes)
        for node_id in previous:
            if node_id in self._nodes:
                self._remove_node(node_id, source)
        self._record(CLEAR_ALL, "clear", item_type="selection")
        self._publish_changed(previous, source)

    def get_selection(self) -> SelectionSnapshot:
        return SelectionSnapshot(nodes=tuple(self._nodes), edges=tuple(self._edges))

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_trace(self) -> list[SelectionTraceEntry]:
        """Oldest-first trace: one entry per select/deselect, one per clear."""
        return self._trace.snapshot()

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            self._bus.unsubscribe(subscription)
        self._subscriptions = ()

    def _remove_node(self, node_id: str, source: str | None) -> None:
        del self._nodes[node_id]
        self._record(node_id, "deselect")
        self._bus.publish(
            NODE_DESELECTED,
            {"nodeId": node_id, "source": source},
            _metadata(source),
        )

    def _publish_changed(self, previous: tuple[str, ...], source: str | None) -> None:
        self._bus.publish(
            SELECTION_CHANGED,
            {
                "selectedIds": list(self._nodes),
                "previousSelection": list(previous),
                "source": source,
            },
            _metadata(source),
        )

    def _record(self, item_id: str, action: str, *, item_type: str = "node") -> None:
        self._trace.append(
            SelectionTraceEntry(
                item_id=item_id,
                item_type=item_type,
                action=action,
                timestamp=float(self._clock()),
            )
        )

    def _on_graph_node_selected(self, event: Event, bus: object) -> None:
        node_id = event.payload.get("nodeId")
        if node_id is None:
            _LOG.warning("selection_event_missing_node_id name=%s id=%s", event.name, event.id)
            return
        self.select_node(
            str(node_id),
            multi=bool(event.payload.get("multiSelect", False)),
            source=event.payload.get("source", event.metadata.source),
        )

    def _on_graph_node_deselected(self, event: Event, bus: object) -> None:
        node_id = event.payload.get("nodeId")
        if node_id is None:
            _LOG.warning("selection_event_missing_node_id name=%s id=%s", event.name, event.id)
            return
        self.deselect_node(str(node_id), source=event.payload.get("source", event.metadata.source))


def _metadata(source: str | None) -> dict[str, Any] | None:
    return None if source is None else {"source": source}


SelectionManager = RuntimeSelectionManager

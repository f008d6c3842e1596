"""Public selection API contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from graphstate.api.events import EventBus

NODE_SELECTED = "node.selected"
NODE_DESELECTED = "node.deselected"
SELECTION_CHANGED = "selection.changed"
GRAPH_NODE_SELECTED = "graph.node.selected"
GRAPH_NODE_DESELECTED = "graph.node.deselected"


@dataclass(frozen=True, slots=True)
class SelectionSnapshot:
    """Point-in-time copy of the selection."""

    nodes: tuple[str, ...] = ()
    edges: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.nodes) + len(self.edges)


@dataclass(frozen=True, slots=True)
class SelectionTraceEntry:
    """Diagnostic record of one selection mutation."""

    item_id: str
    item_type: str
    action: str
    timestamp: float
    type: str = "selection"


class SelectionManager(Protocol):
    """Selected graph items, republished as normalized bus events."""

    def select_node(self, node_id: str, *, multi: bool = False, source: str | None = None) -> bool:
        """Select node, replacing the selection unless ``multi``."""

    def deselect_node(self, node_id: str, *, source: str | None = None) -> bool:
        """Deselect node if selected."""

    def clear_selection(self, *, source: str | None = None) -> None:
        """Deselect everything."""

    def get_selection(self) -> SelectionSnapshot:
        """Return selection snapshot."""

    def is_selected(self, node_id: str) -> bool:
        """Return whether node is selected."""

    def get_trace(self) -> list[SelectionTraceEntry]:
        """Return bounded mutation trace, oldest first."""

    def dispose(self) -> None:
        """Detach from the bus."""


def create_selection_manager(bus: EventBus, *, max_history_size: int = 20) -> SelectionManager:
    """Create default selection manager bound to ``bus``."""
    from graphstate.runtime.selection import RuntimeSelectionManager

    return RuntimeSelectionManager(bus, max_history_size=max_history_size)

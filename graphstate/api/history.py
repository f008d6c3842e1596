"""Public undo/redo history API contracts."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from graphstate.api.events import EventBus

UNDO_CHANGED = "history.undo.changed"
REDO_CHANGED = "history.redo.changed"
ACTION_PERFORMED = "history.action.performed"


class _Nothing:
    """Sentinel returned by undo/redo on an empty stack."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False


NOTHING = _Nothing()


@runtime_checkable
class Action(Protocol):
    """Reversible command; anything with these members qualifies."""

    name: str

    def execute(self) -> Any:
        """Apply the change."""

    def undo(self) -> Any:
        """Revert the change."""


@dataclass(frozen=True, slots=True)
class FunctionAction:
    """Action assembled from a pair of closures."""

    name: str
    do: Callable[[], Any]
    revert: Callable[[], Any]
    timestamp: float = field(default_factory=time.time)

    def execute(self) -> Any:
        return self.do()

    def undo(self) -> Any:
        return self.revert()


class HistoryManager(Protocol):
    """Command-pattern undo/redo stacks."""

    def execute(self, action: Action) -> Any:
        """Run action and record it for undo."""

    def undo(self) -> Any:
        """Revert most recent action or return ``NOTHING``."""

    def redo(self) -> Any:
        """Re-apply most recently undone action or return ``NOTHING``."""

    def can_undo(self) -> bool:
        """Return whether undo is available."""

    def can_redo(self) -> bool:
        """Return whether redo is available."""

    def clear(self) -> None:
        """Drop both stacks."""

    def undo_names(self) -> tuple[str, ...]:
        """Return undoable action names, oldest first."""

    def redo_names(self) -> tuple[str, ...]:
        """Return redoable action names, oldest first."""


@dataclass(frozen=True, slots=True)
class HistoryAvailability:
    """Undo/redo availability as seen by bound UI."""

    undo_size: int = 0
    can_undo: bool = False
    redo_size: int = 0
    can_redo: bool = False


def create_history_manager(bus: EventBus, *, max_history_size: int = 50) -> HistoryManager:
    """Create default history manager bound to ``bus``."""
    from graphstate.runtime.history import RuntimeHistoryManager

    return RuntimeHistoryManager(bus, max_history_size=max_history_size)

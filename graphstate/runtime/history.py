"""Command-pattern undo/redo history."""

from __future__ import annotations

import logging
from typing import Any

from graphstate.api.events import EventBus
from graphstate.api.history import (
    ACTION_PERFORMED,
    NOTHING,
    REDO_CHANGED,
    UNDO_CHANGED,
    Action,
)

_LOG = logging.getLogger("graphstate.history")


class RuntimeHistoryManager:
    """Undo and redo stacks over reversible actions.

    A freshly executed action always clears the redo stack, so history stays
    linear. Every mutation publishes both ``history.undo.changed`` and
    ``history.redo.changed``.
    """

    def __init__(self, bus: EventBus, *, max_history_size: int = 50) -> None:
        if max_history_size <= 0:
            raise ValueError("max_history_size must be > 0")
        self._bus = bus
        self._max_history_size = int(max_history_size)
        self._undo_stack: list[Action] = []
        self._redo_stack: list[Action] = []

    @property
    def max_history_size(self) -> int:
        return self._max_history_size

    def execute(self, action: Action) -> Any:
        """Run ``action.execute()`` and record the action for undo."""
        result = action.execute()
        self._undo_stack.append(action)
        self._redo_stack.clear()
        if len(self._undo_stack) > self._max_history_size:
            evicted = self._undo_stack.pop(0)
            _LOG.debug("history_evicted action=%s", evicted.name)
        self._notify()
        return result

    def undo(self) -> Any:
        if not self._undo_stack:
            return NOTHING
        action = self._undo_stack[-1]
        result = action.undo()
        self._undo_stack.pop()
        self._redo_stack.append(action)
        self._notify()
        self._bus.publish(ACTION_PERFORMED, {"type": "undo", "actionName": action.name})
        return result

    def redo(self) -> Any:
        if not self._redo_stack:
            return NOTHING
        action = self._redo_stack[-1]
        result = action.execute()
        self._redo_stack.pop()
        self._undo_stack.append(action)
        self._notify()
        self._bus.publish(ACTION_PERFORMED, {"type": "redo", "actionName": action.name})
        return result

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._notify()

    def undo_names(self) -> tuple[str, ...]:
        """Return undoable action names, oldest first."""
        return tuple(action.name for action in self._undo_stack)

    def redo_names(self) -> tuple[str, ...]:
        """Return redoable action names, oldest first."""
        return tuple(action.name for action in self._redo_stack)

    def _notify(self) -> None:
        self._bus.publish(
            UNDO_CHANGED,
            {"size": len(self._undo_stack), "canUndo": self.can_undo()},
        )
        self._bus.publish(
            REDO_CHANGED,
            {"size": len(self._redo_stack), "canRedo": self.can_redo()},
        )


HistoryManager = RuntimeHistoryManager

"""State-layer runtime modules."""

from graphstate.runtime.bindings import (
    ComponentBindings,
    EventObservable,
    bind_history,
    bind_selection,
    observe_event,
)
from graphstate.runtime.composition import (
    RuntimeCompositionContainer,
    bind_state_layer,
    build_state_layer,
)
from graphstate.runtime.config import StateLayerConfig, load_state_layer_config
from graphstate.runtime.events import EventBus, RuntimeEventBus
from graphstate.runtime.history import HistoryManager, RuntimeHistoryManager
from graphstate.runtime.logging import (
    configure_logging,
    logging_config_from,
    setup_logging,
    shutdown_logging,
)
from graphstate.runtime.observable import Observable, RuntimeObservable
from graphstate.runtime.patterns import CompiledPattern, compile_pattern
from graphstate.runtime.ring_buffer import RingBuffer
from graphstate.runtime.selection import RuntimeSelectionManager, SelectionManager

__all__ = [
    "CompiledPattern",
    "ComponentBindings",
    "EventBus",
    "EventObservable",
    "HistoryManager",
    "Observable",
    "RingBuffer",
    "RuntimeCompositionContainer",
    "RuntimeEventBus",
    "RuntimeHistoryManager",
    "RuntimeObservable",
    "RuntimeSelectionManager",
    "SelectionManager",
    "StateLayerConfig",
    "bind_history",
    "bind_selection",
    "bind_state_layer",
    "build_state_layer",
    "compile_pattern",
    "configure_logging",
    "load_state_layer_config",
    "logging_config_from",
    "observe_event",
    "setup_logging",
    "shutdown_logging",
]

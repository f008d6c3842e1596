"""Public state-layer API contracts."""

from graphstate.api.composition import ServiceBinder, ServiceResolver, StateLayer
from graphstate.api.events import (
    CANCEL,
    NO_CONTEXT,
    DeliveryError,
    Event,
    EventBus,
    EventMetadata,
    Middleware,
    MiddlewareResult,
    PublishResult,
    Subscription,
    create_event_bus,
)
from graphstate.api.history import (
    NOTHING,
    Action,
    FunctionAction,
    HistoryAvailability,
    HistoryManager,
    create_history_manager,
)
from graphstate.api.logging import LoggingConfig
from graphstate.api.observable import Observable, create_observable
from graphstate.api.selection import (
    SelectionManager,
    SelectionSnapshot,
    SelectionTraceEntry,
    create_selection_manager,
)

__all__ = [
    "Action",
    "CANCEL",
    "DeliveryError",
    "Event",
    "EventBus",
    "EventMetadata",
    "FunctionAction",
    "HistoryAvailability",
    "HistoryManager",
    "LoggingConfig",
    "Middleware",
    "MiddlewareResult",
    "NO_CONTEXT",
    "NOTHING",
    "Observable",
    "PublishResult",
    "SelectionManager",
    "SelectionSnapshot",
    "SelectionTraceEntry",
    "ServiceBinder",
    "ServiceResolver",
    "StateLayer",
    "Subscription",
    "create_event_bus",
    "create_history_manager",
    "create_observable",
    "create_selection_manager",
]

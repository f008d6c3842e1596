"""In-process event bus and derived reactive state for graph exploration."""

from graphstate.api.composition import StateLayer
from graphstate.api.events import CANCEL, Event, MiddlewareResult, PublishResult, Subscription
from graphstate.api.history import NOTHING, FunctionAction
from graphstate.api.selection import SelectionSnapshot
from graphstate.runtime.composition import build_state_layer

__all__ = [
    "CANCEL",
    "Event",
    "FunctionAction",
    "MiddlewareResult",
    "NOTHING",
    "PublishResult",
    "SelectionSnapshot",
    "StateLayer",
    "Subscription",
    "build_state_layer",
]

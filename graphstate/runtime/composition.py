"""State-layer composition root."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar, cast

from graphstate.api.composition import ServiceBinder, ServiceResolver, StateLayer
from graphstate.api.events import EventBus
from graphstate.api.history import HistoryManager
from graphstate.api.selection import SelectionManager
from graphstate.runtime.config import StateLayerConfig, load_state_layer_config
from graphstate.runtime.events import RuntimeEventBus
from graphstate.runtime.history import RuntimeHistoryManager
from graphstate.runtime.logging import setup_logging
from graphstate.runtime.selection import RuntimeSelectionManager

_LOG = logging.getLogger("graphstate.composition")

TBinding = TypeVar("TBinding")


class RuntimeCompositionContainer(ServiceBinder):
    """Dependency container with lazy singleton factory resolution."""

    def __init__(self) -> None:
        self._instances: dict[object, object] = {}
        self._factories: dict[object, Callable[[ServiceResolver], object]] = {}

    def bind_factory(
        self, token: type[TBinding] | object, factory: Callable[[ServiceResolver], TBinding]
    ) -> None:
        self._factories[token] = factory
        self._instances.pop(token, None)

    def bind_instance(self, token: type[TBinding] | object, instance: TBinding) -> None:
        self._instances[token] = instance

    def resolve(self, token: type[TBinding] | object) -> TBinding:
        if token in self._instances:
            return cast(TBinding, self._instances[token])
        factory = self._factories.get(token)
        if factory is None:
            raise KeyError(f"missing composition binding: {getattr(token, '__qualname__', str(token))}")
        instance = cast(TBinding, factory(self))
        self._instances[token] = instance
        return instance


def bind_state_layer(binder: ServiceBinder, config: StateLayerConfig) -> None:
    """Register default factories; the bus is resolved before either manager."""
    binder.bind_instance(StateLayerConfig, config)
    binder.bind_factory(
        EventBus,
        lambda resolver: RuntimeEventBus(
            max_history_size=resolver.resolve(StateLayerConfig).event_history_size,
            trace_events=resolver.resolve(StateLayerConfig).trace_events,
        ),
    )
    binder.bind_factory(
        SelectionManager,
        lambda resolver: RuntimeSelectionManager(
            resolver.resolve(EventBus),
            max_history_size=resolver.resolve(StateLayerConfig).selection_trace_size,
        ),
    )
    binder.bind_factory(
        HistoryManager,
        lambda resolver: RuntimeHistoryManager(
            resolver.resolve(EventBus),
            max_history_size=resolver.resolve(StateLayerConfig).undo_limit,
        ),
    )


def build_state_layer(
    config: StateLayerConfig | None = None,
    *,
    configure: Callable[[ServiceBinder], None] | None = None,
) -> StateLayer:
    """Construct bus, selection manager and history manager, in that order.

    ``configure`` may override any binding before resolution. Root logging is
    set up at ``config.log_level`` unless handlers are already installed.
    """
    resolved_config = config or load_state_layer_config()
    setup_logging(resolved_config)
    container = RuntimeCompositionContainer()
    bind_state_layer(container, resolved_config)
    if configure is not None:
        configure(container)
    bus = container.resolve(EventBus)
    layer = StateLayer(
        bus=bus,
        selection=container.resolve(SelectionManager),
        history=container.resolve(HistoryManager),
    )
    _LOG.debug(
        "state_layer_built history=%d selection_trace=%d undo_limit=%d",
        resolved_config.event_history_size,
        resolved_config.selection_trace_size,
        resolved_config.undo_limit,
    )
    return layer

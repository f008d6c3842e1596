"""Public composition contracts for the state layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from graphstate.api.events import EventBus
from graphstate.api.history import HistoryManager
from graphstate.api.selection import SelectionManager

TBinding = TypeVar("TBinding")


class ServiceResolver(ABC):
    """Composition resolver contract."""

    @abstractmethod
    def resolve(self, token: type[TBinding] | object) -> TBinding:
        """Resolve bound dependency by token."""


class ServiceBinder(ServiceResolver, ABC):
    """Composition binder contract."""

    @abstractmethod
    def bind_factory(
        self, token: type[TBinding] | object, factory: Callable[[ServiceResolver], TBinding]
    ) -> None:
        """Bind/override dependency factory."""

    @abstractmethod
    def bind_instance(self, token: type[TBinding] | object, instance: TBinding) -> None:
        """Bind/override concrete dependency instance."""


@dataclass(frozen=True, slots=True)
class StateLayer:
    """Explicitly constructed state-layer services."""

    bus: EventBus
    selection: SelectionManager
    history: HistoryManager

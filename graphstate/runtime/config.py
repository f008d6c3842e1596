"""State-layer configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class StateLayerConfig:
    """Immutable state-layer configuration."""

    event_history_size: int = 100
    selection_trace_size: int = 20
    undo_limit: int = 50
    trace_events: bool = False
    log_level: str = "INFO"


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("GRAPHSTATE_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = default
    return value.strip().upper()


def load_state_layer_config(*, env: Mapping[str, str] | None = None) -> StateLayerConfig:
    """Load configuration from env vars, or from ``env`` when given."""
    return StateLayerConfig(
        event_history_size=_int("GRAPHSTATE_EVENT_HISTORY_SIZE", 100, minimum=1, env=env),
        selection_trace_size=_int("GRAPHSTATE_SELECTION_TRACE_SIZE", 20, minimum=1, env=env),
        undo_limit=_int("GRAPHSTATE_UNDO_LIMIT", 50, minimum=1, env=env),
        trace_events=_flag("GRAPHSTATE_TRACE_EVENTS", False, env=env),
        log_level=resolve_log_level_name(env=env),
    )

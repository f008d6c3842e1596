"""JSON codec helpers for log and event export paths."""

from __future__ import annotations

from typing import Any

import orjson

from graphstate.api.events import Event


def _default(value: Any) -> Any:
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if hasattr(value, "items"):
        return dict(value.items())
    if isinstance(value, (set, frozenset)):
        return list(value)
    return repr(value)


def dumps_bytes(payload: Any, *, pretty: bool = False, sort_keys: bool = False) -> bytes:
    """Serialize payload to UTF-8 JSON bytes."""
    options = 0
    if pretty:
        options |= orjson.OPT_INDENT_2
    if sort_keys:
        options |= orjson.OPT_SORT_KEYS
    return orjson.dumps(payload, default=_default, option=options)


def dumps_text(payload: Any, *, pretty: bool = False, sort_keys: bool = False) -> str:
    return dumps_bytes(payload, pretty=pretty, sort_keys=sort_keys).decode("utf-8")


def event_to_dict(event: Event) -> dict[str, Any]:
    """Plain-dict view of an ``Event`` for logging and inspection."""
    return {
        "id": event.id,
        "name": event.name,
        "payload": dict(event.payload),
        "metadata": {
            "timestamp": event.metadata.timestamp,
            "correlation_id": event.metadata.correlation_id,
            "source": event.metadata.source,
            **dict(event.metadata.extra),
        },
    }

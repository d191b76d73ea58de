"""Telemetry events for service dispatch.

A small in-process event bus. The dispatcher emits one span per handled body
(start + stop, or start + exception) and one exception event per captured
handler failure. Listeners attach to event names and receive
``(event, measurements, metadata, config)``.

Event names are tuples: ("jsonrpc2", <name>, "start" | "stop" | "exception").

Usage:
    def on_stop(event, measurements, metadata, config):
        print(event, measurements["duration"])

    telemetry.attach("my-listener", ("jsonrpc2", "service", "stop"), on_stop)
"""

from __future__ import annotations

import logging
import threading
import time
from types import TracebackType
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

PREFIX = "jsonrpc2"

Event = tuple[str, ...]
Listener = Callable[[Event, dict[str, Any], dict[str, Any], Any], None]

T = TypeVar("T")

_listeners: dict[str, tuple[tuple[Event, ...], Listener, Any]] = {}
_lock = threading.Lock()


def attach(
    handler_id: str,
    event: Event | list[Event],
    listener: Listener,
    config: Any = None,
) -> None:
    """Attach a listener to one event name or a list of them.

    Raises:
        ValueError: If handler_id is already attached.
    """
    events = tuple(event) if isinstance(event, list) else (event,)
    with _lock:
        if handler_id in _listeners:
            raise ValueError(f"Telemetry handler already attached: {handler_id}")
        _listeners[handler_id] = (events, listener, config)


def detach(handler_id: str) -> bool:
    """Detach a listener. Returns False when it was not attached."""
    with _lock:
        return _listeners.pop(handler_id, None) is not None


def list_handlers() -> list[str]:
    with _lock:
        return sorted(_listeners)


def execute(event: Event, measurements: dict[str, Any], metadata: dict[str, Any]) -> None:
    """Deliver an event to every listener attached to it.

    A listener that raises is logged and detached so it cannot break dispatch.
    """
    logger.debug("telemetry %s %s", ":".join(event), measurements)
    with _lock:
        targets = [
            (handler_id, listener, config)
            for handler_id, (events, listener, config) in _listeners.items()
            if event in events
        ]
    for handler_id, listener, config in targets:
        try:
            listener(event, measurements, metadata, config)
        except Exception:
            logger.exception("Telemetry handler %s failed, detaching", handler_id)
            detach(handler_id)


def span(name: str, metadata: dict[str, Any], fn: Callable[[], tuple[T, dict[str, Any]]]) -> T:
    """Run ``fn`` inside a span.

    ``fn`` returns ``(result, stop_metadata)``. Emits start, then stop with
    the duration, or exception if ``fn`` raises (the error is re-raised).
    """
    start_time = time.monotonic()
    execute((PREFIX, name, "start"), {"monotonic_time": start_time}, metadata)
    try:
        result, stop_metadata = fn()
    except BaseException as exc:
        execute(
            (PREFIX, name, "exception"),
            {"duration": time.monotonic() - start_time},
            {
                **metadata,
                "kind": "error" if isinstance(exc, Exception) else "exit",
                "reason": exc,
                "stacktrace": exc.__traceback__,
            },
        )
        raise
    execute(
        (PREFIX, name, "stop"),
        {"duration": time.monotonic() - start_time},
        stop_metadata,
    )
    return result


def exception(
    name: str,
    start_time: float,
    kind: str,
    reason: Any,
    stacktrace: TracebackType | None,
    metadata: dict[str, Any],
    measurements: dict[str, Any] | None = None,
) -> None:
    """Emit an exception event for a failure captured outside a span."""
    execute(
        (PREFIX, name, "exception"),
        {"duration": time.monotonic() - start_time, **(measurements or {})},
        {
            **metadata,
            "kind": kind,
            "reason": reason,
            "stacktrace": stacktrace,
            "start_time": start_time,
        },
    )

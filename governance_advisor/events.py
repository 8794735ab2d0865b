"""
Event notification.

The engine and the rules engine announce what they did through an optional
``EventSink``. ``EventBus`` is the in-process implementation: listeners are
registered explicitly per event name and called in registration order.

Events emitted
--------------
    recommendations.generated : RecommendationResult
    rules.evaluated           : {"context": ..., "results": ...}
    notification.show         : {"message", "type", "source", "rule_id"}

A listener that raises is logged and skipped; the remaining listeners still
run and the emitter never sees the error.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


@runtime_checkable
class EventSink(Protocol):
    def emit(self, event: str, payload: Any) -> None: ...


class EventBus:
    """Explicit publish/subscribe registry keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners[event].append(listener)
        return lambda: self.off(event, listener)

    def off(self, event: str, listener: Listener) -> bool:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def emit(self, event: str, payload: Any = None) -> None:
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener for %r raised; continuing", event)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))


def emit_event(sink: EventSink | None, event: str, payload: Any) -> None:
    """Emit on ``sink`` if one is configured.

    Notification is best-effort: a sink that raises is logged at WARNING and
    the caller carries on.
    """
    if sink is None:
        return
    try:
        sink.emit(event, payload)
    except Exception:
        logger.warning("Event sink failed for %r; continuing", event, exc_info=True)

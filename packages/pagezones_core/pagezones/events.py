"""
Notification channel for zone changes.

``EventChannel`` is a small publish/subscribe bus. Every emitted event is also
kept in an output queue so callers and tests can read what the engine
broadcast without registering a listener.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ZONE_ADJUSTED = "zone:adjusted"
ZONE_RESET = "zone:reset"
ZONE_EDIT_MODE_ENABLED = "zone:edit-mode-enabled"
ZONE_EDIT_MODE_DISABLED = "zone:edit-mode-disabled"
ZONE_VALIDATION_WARNING = "zone:validation-warning"

Listener = Callable[[Dict[str, Any]], None]


@dataclass(frozen=True)
class ZoneEvent:
    """A broadcast notification."""
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)


class EventChannel:
    """Publish/subscribe channel with a readable queue of emitted events."""

    def __init__(self, max_queue: Optional[int] = 1000):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._queue: List[ZoneEvent] = []
        self.max_queue = max_queue

    def emit(self, name: str, payload: Optional[Dict[str, Any]] = None) -> ZoneEvent:
        """Queue the event and deliver it to every listener of ``name``.

        A listener that raises is logged and skipped; delivery continues.
        """
        event = ZoneEvent(name=name, payload=dict(payload or {}))
        self._queue.append(event)
        if self.max_queue is not None and len(self._queue) > self.max_queue:
            del self._queue[0]

        for callback in list(self._listeners.get(name, ())):
            try:
                callback(event.payload)
            except Exception:
                logger.warning(f'Error in event listener for "{name}"', exc_info=True)

        logger.debug(f"Event emitted: {name} {event.payload}")
        return event

    def on(self, name: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for ``name``; returns an unsubscribe function."""
        if callback not in self._listeners[name]:
            self._listeners[name].append(callback)
        return lambda: self.off(name, callback)

    def off(self, name: str, callback: Listener) -> None:
        listeners = self._listeners.get(name)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def once(self, name: str, callback: Listener) -> Callable[[], None]:
        """Register a listener that unsubscribes itself after the first delivery."""
        def wrapper(payload: Dict[str, Any]) -> None:
            unsubscribe()
            callback(payload)

        unsubscribe = self.on(name, wrapper)
        return unsubscribe

    def clear(self, name: Optional[str] = None) -> None:
        """Remove listeners for ``name``, or all listeners."""
        if name:
            self._listeners.pop(name, None)
        else:
            self._listeners.clear()

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, ()))

    @property
    def events(self) -> List[ZoneEvent]:
        """Emitted events still in the queue, oldest first."""
        return list(self._queue)

    def drain(self) -> List[ZoneEvent]:
        """Return and clear the queued events."""
        drained, self._queue = self._queue, []
        return drained

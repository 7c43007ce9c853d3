"""
Lifecycle events.

Each factory owns one emitter. Listeners are notifications only: they run
synchronously in subscription order and can never change the invocation flow.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger("handler_factory.events")

Listener = Callable[..., Any]


class HandlerEventType(str, Enum):
    """Emitted event types."""

    CALLED = "called"
    SUCCEEDED = "succeeded"
    ERROR = "error"
    FINISHED = "finished"
    TIME_OUT = "timeOut"
    PERSISTED = "persisted"


class Subscription:
    """Handle returned by subscribe(); detach() removes the listener."""

    def __init__(self, emitter: "HandlerEventEmitter", event: HandlerEventType, listener: Listener):
        self._emitter = emitter
        self.event = event
        self.listener = listener
        self.active = True

    def detach(self) -> None:
        if not self.active:
            return
        self._emitter._remove(self.event, self.listener)
        self.active = False


class HandlerEventEmitter:
    """
    Observer registry for lifecycle events.

    An event without listeners is dropped silently, including "error".
    """

    def __init__(self):
        self._listeners: Dict[HandlerEventType, List[Listener]] = {}

    def subscribe(self, event: HandlerEventType, listener: Listener) -> Subscription:
        event = HandlerEventType(event)
        self._listeners.setdefault(event, []).append(listener)
        return Subscription(self, event, listener)

    def emit(self, event: HandlerEventType, *args: Any) -> None:
        event = HandlerEventType(event)
        # Copy so listeners may detach while being notified.
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(*args)
            except Exception as e:
                logger.error(
                    f"Listener for '{event.value}' failed: {e}",
                    exc_info=True,
                    extra={"event": event.value},
                )

    def listener_count(self, event: HandlerEventType) -> int:
        return len(self._listeners.get(HandlerEventType(event), []))

    def _remove(self, event: HandlerEventType, listener: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

import logging
import threading
from typing import Any, Callable

from taskboard.core.sequencer import Sequencer

log = logging.getLogger("taskboard.event_bus")


class Subscription:
    """Handle returned by :meth:`EventEmitter.subscribe`.

    Its only operation is :meth:`unsubscribe`, bound to the subscription id.
    """

    __slots__ = ("id", "event_name", "callback", "_emitter")

    def __init__(self, emitter: "EventEmitter", sub_id: int,
                 event_name: str, callback: Callable):
        self.id = sub_id
        self.event_name = event_name
        self.callback = callback
        self._emitter = emitter

    def unsubscribe(self) -> None:
        self._emitter.unsubscribe(self.id)

    def __repr__(self) -> str:
        return f"Subscription(id={self.id}, event_name={self.event_name!r})"


class EventEmitter:
    """Synchronous publish/subscribe hub.

    Components hold one of these and expose ``subscribe``/``emit`` by
    delegation so external listeners can follow their state transitions.
    Delivery follows subscription order; a failing callback is logged and
    does not stop delivery to the others.
    """

    def __init__(self):
        self._subscriptions: dict[int, Subscription] = {}
        self._sequencer = Sequencer()
        self._lock = threading.Lock()

    def subscribe(self, event_name: str, callback: Callable) -> Subscription:
        with self._lock:
            sub = Subscription(self, self._sequencer.next(), event_name, callback)
            self._subscriptions[sub.id] = sub
        log.debug("Subscribed #%d to '%s': %s", sub.id, event_name,
                  getattr(callback, "__name__", callback))
        return sub

    def unsubscribe(self, subscription: Subscription | int) -> None:
        sub_id = subscription.id if isinstance(subscription, Subscription) else subscription
        with self._lock:
            removed = self._subscriptions.pop(sub_id, None)
        if removed is not None:
            log.debug("Unsubscribed #%d from '%s'", sub_id, removed.event_name)

    def emit(self, event_name: str, payload: Any = None) -> None:
        with self._lock:
            callbacks = [s.callback for s in self._subscriptions.values()
                         if s.event_name == event_name]

        for callback in callbacks:
            try:
                callback(payload)
            except Exception:
                log.exception(
                    "Error in event handler for '%s': %s",
                    event_name,
                    getattr(callback, "__name__", callback),
                )

    def subscriber_count(self, event_name: str | None = None) -> int:
        with self._lock:
            if event_name is None:
                return len(self._subscriptions)
            return sum(1 for s in self._subscriptions.values()
                       if s.event_name == event_name)

    def clear(self) -> None:
        with self._lock:
            self._subscriptions.clear()

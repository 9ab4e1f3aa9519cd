"""Scoped event bindings.

A binding couples one event source to one callback. Registration happens
in the constructor and :meth:`Binding.teardown` is the only way to stop
receiving the event. Components keep every binding they create and tear
them all down before detaching their view.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from taskboard.core.event_bus import Subscription

log = logging.getLogger("taskboard.binding")


class EventSource(Protocol):
    def subscribe(self, event_name: str, callback: Callable) -> Subscription: ...


class Binding:
    """An (event, callback) registration on a source, released exactly once."""

    def __init__(self, event_name: str, source: EventSource, callback: Callable):
        self.event_name = event_name
        self.source = source
        self.callback = callback
        self._subscription: Subscription | None = source.subscribe(event_name, callback)

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def teardown(self) -> None:
        if self._subscription is None:
            log.debug("Binding for '%s' already released", self.event_name)
            return
        self._subscription.unsubscribe()
        self._subscription = None

    def __repr__(self) -> str:
        state = "active" if self.active else "released"
        return f"Binding({self.event_name!r}, {state})"

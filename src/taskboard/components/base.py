"""Base class for view components.

A component builds its element in :meth:`Component.init`, owns the
bindings it registers on that element, and releases both in
:meth:`Component.destroy`: bindings first, then the view. Coroutines
started from UI callbacks are tracked so callers can wait for them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

from taskboard.core.binding import Binding, EventSource
from taskboard.ui.widgets import Element

log = logging.getLogger("taskboard.components.base")


class Component:
    """Base class for all components."""

    name: str = "component"

    def __init__(self):
        self._element: Element | None = None
        self._handlers: list[Binding] = []
        self._pending: set[asyncio.Task] = set()
        self._released = False

    @property
    def element(self) -> Element | None:
        return self._element

    @property
    def destroyed(self) -> bool:
        return self._released

    @property
    def pending(self) -> set[asyncio.Task]:
        return set(self._pending)

    async def init(self) -> Element:
        """Build and return the component's element."""
        raise NotImplementedError

    def bind(self, event_name: str, source: EventSource, callback: Callable) -> Binding:
        handler = Binding(event_name, source, callback)
        self._handlers.append(handler)
        return handler

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run ``coro`` as a task owned by this component."""
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("Unhandled error in %s task", self.name, exc_info=exc)

    async def settle(self) -> None:
        """Wait until every task started by this component has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def destroy(self) -> None:
        """Tear down bindings, then remove the view. Safe to call twice."""
        if self._released:
            log.debug("%s already destroyed", self.name)
            return
        self._released = True
        for handler in self._handlers:
            handler.teardown()
        self._handlers.clear()
        if self._element is not None:
            self._element.remove()
        log.debug("%s destroyed", self.name)

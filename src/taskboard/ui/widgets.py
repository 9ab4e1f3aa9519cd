"""Element tree that component views are rendered into.

Elements are event sources (``click``, ``input``...) so bindings can attach
to them, and they can be detached from their parent when a component is
destroyed. The root of a tree is a :class:`RenderTarget`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from taskboard.core.event_bus import EventEmitter, Subscription

log = logging.getLogger("taskboard.ui.widgets")


class Element:
    """A node of the view tree."""

    def __init__(self, tag: str = "div", name: str | None = None,
                 css_class: str | None = None, text: str = "",
                 hidden: bool = False):
        self.tag = tag
        self.name = name
        self.css_class = css_class
        self.text = text
        self.value = ""
        self.hidden = hidden
        self.children: list[Element] = []
        self.parent: Element | None = None
        self._events = EventEmitter()

    # --- events ---

    def subscribe(self, event_name: str, callback: Callable) -> Subscription:
        return self._events.subscribe(event_name, callback)

    def dispatch(self, event_name: str, payload: Any = None) -> None:
        self._events.emit(event_name, self if payload is None else payload)

    def click(self) -> None:
        self.dispatch("click")

    def listener_count(self, event_name: str | None = None) -> int:
        return self._events.subscriber_count(event_name)

    # --- tree ---

    def append(self, *children: Element) -> Element:
        for child in children:
            if child.parent is not None:
                child.remove()
            child.parent = self
            self.children.append(child)
        return self

    def remove(self) -> None:
        """Detach from the parent; no-op when already detached."""
        if self.parent is None:
            return
        self.parent.children.remove(self)
        self.parent = None

    @property
    def attached(self) -> bool:
        return self.parent is not None

    def iter(self) -> Iterator[Element]:
        yield self
        for child in self.children:
            yield from child.iter()

    def query(self, name: str) -> Element | None:
        for el in self.iter():
            if el.name == name:
                return el
        return None

    def find_all(self, css_class: str) -> list[Element]:
        return [el for el in self.iter() if el.css_class == css_class]

    @property
    def visible(self) -> bool:
        el: Element | None = self
        while el is not None:
            if el.hidden:
                return False
            el = el.parent
        return True

    def __repr__(self) -> str:
        label = f"#{self.name}" if self.name else ""
        cls = f".{self.css_class}" if self.css_class else ""
        return f"<{self.tag}{label}{cls}>"


class RenderTarget(Element):
    """Root element hosting the mounted component views."""

    def __init__(self, name: str = "root"):
        super().__init__("div", name=name, css_class="content")

    def mount(self, element: Element) -> None:
        self.append(element)
        log.debug("Mounted %r", element)

    def clear(self) -> None:
        for child in list(self.children):
            child.remove()

"""Per-task view/edit component.

States::

    VIEWING --edit()--> EDITING --save()--> SAVING --settled--> VIEWING
    EDITING|SAVING --cancel()--> VIEWING
    VIEWING --complete()--> COMPLETED --reopen()--> VIEWING
    any --destroy()--> DESTROYED

``complete()`` only announces the intent through the ``completed`` event;
whoever listens performs the remote delete and destroys the component.

Every edit() opens a new edit session. A save only applies its outcome to
the view if its session is still the current one when the store answers.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from taskboard.components.base import Component
from taskboard.core.errors import MissingCollaborator, RemoteError
from taskboard.core.event_bus import EventEmitter, Subscription
from taskboard.ui.widgets import Element

if TYPE_CHECKING:
    from taskboard.tasks.model import RestTaskModel
    from taskboard.ui.templates import TemplateSource

log = logging.getLogger("taskboard.components.task")

COMPLETED_EVENT = "completed"


class ViewState(Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"
    COMPLETED = "completed"
    DESTROYED = "destroyed"


class TaskComponent(Component):
    """Shows one task and lets the user edit or complete it."""

    name = "task"

    def __init__(self, task: RestTaskModel, templates: TemplateSource):
        super().__init__()
        self.task = task
        self._templates = templates
        self._events = EventEmitter()
        self._state = ViewState.VIEWING
        self._edit_session = 0
        self._view: Element | None = None
        self._edit: Element | None = None
        self._label: Element | None = None
        self._input: Element | None = None

    @property
    def state(self) -> ViewState:
        return self._state

    # --- events (delegated) ---

    def subscribe(self, event_name: str, callback: Callable) -> Subscription:
        return self._events.subscribe(event_name, callback)

    def emit(self, event_name: str, payload=None) -> None:
        self._events.emit(event_name, payload)

    # --- lifecycle ---

    async def init(self) -> Element:
        self._view = self._templates.build("task-view")
        self._edit = self._templates.build("task-edit")
        self._label = self._view.query("description")
        self._input = self._edit.query("description-input")

        buttons = {name: (self._view.query(name) or self._edit.query(name))
                   for name in ("edit", "complete", "save", "cancel")}
        missing = [n for n, el in buttons.items() if el is None]
        if self._label is None or self._input is None or missing:
            raise MissingCollaborator(f"task templates lack elements: {missing or 'label/input'}")

        self._element = Element("li", name=f"task-{self.task.id}", css_class="task")
        self._element.append(self._view, self._edit)

        self.bind("click", buttons["edit"], lambda _: self.edit())
        self.bind("click", buttons["complete"], lambda _: self.complete())
        self.bind("click", buttons["save"], lambda _: self.spawn(self.save()))
        self.bind("click", buttons["cancel"], lambda _: self.cancel())

        self.render()
        return self._element

    def render(self) -> None:
        """Sync the view with the state and the entity."""
        if self._element is None or self._released:
            return
        self._label.text = self.task.description
        editing = self._state in (ViewState.EDITING, ViewState.SAVING)
        self._view.hidden = editing
        self._edit.hidden = not editing

    # --- transitions ---

    def edit(self) -> None:
        if self._state is not ViewState.VIEWING:
            log.debug("edit() ignored in state %s", self._state.value)
            return
        self._input.value = self.task.description
        self._edit_session += 1
        self._state = ViewState.EDITING
        self.render()

    async def save(self) -> None:
        if self._state is not ViewState.EDITING:
            log.debug("save() ignored in state %s", self._state.value)
            return
        value = (self._input.value or "").strip()
        if not value:
            log.debug("Empty description for task %s, nothing to save", self.task.id)
            self._finish_edit()
            return

        session = self._edit_session
        self._state = ViewState.SAVING
        try:
            await self.task.update(value)
        except RemoteError:
            log.exception("Could not update task %s", self.task.id)

        if self._released:
            log.debug("Task %s settled after destroy, ignoring", self.task.id)
            return
        if session != self._edit_session or self._state is not ViewState.SAVING:
            # cancelled or superseded: only the label may change
            log.debug("Stale save for task %s settled, keeping current edit", self.task.id)
            self.render()
            return
        self._finish_edit()

    def _finish_edit(self) -> None:
        self._input.value = ""
        self._state = ViewState.VIEWING
        self.render()

    def cancel(self) -> None:
        if self._state not in (ViewState.EDITING, ViewState.SAVING):
            return
        self._input.value = ""
        self._state = ViewState.VIEWING
        self.render()

    def complete(self) -> None:
        if self._state is not ViewState.VIEWING:
            log.debug("complete() ignored in state %s", self._state.value)
            return
        self._state = ViewState.COMPLETED
        self.emit(COMPLETED_EVENT, self.task)

    def reopen(self) -> None:
        """Back to VIEWING after a completion the store refused."""
        if self._state is not ViewState.COMPLETED:
            return
        self._state = ViewState.VIEWING
        self.render()

    def destroy(self) -> None:
        if self._released:
            return
        super().destroy()
        self._events.clear()
        self._state = ViewState.DESTROYED

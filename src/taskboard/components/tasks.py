"""Task list controller.

Owns the form that adds tasks, the registry pairing every live task with
its component, and the wiring from a component's ``completed`` event to
the remote delete. A task leaves the registry and the view together, and
only after the store confirmed the delete.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from taskboard.components.base import Component
from taskboard.components.task import COMPLETED_EVENT, TaskComponent
from taskboard.core.errors import MissingCollaborator, RemoteError, TaskboardError
from taskboard.tasks.model import RestTaskModel, fetch_tasks
from taskboard.ui.widgets import Element

if TYPE_CHECKING:
    from taskboard.api.rest_client import RestClient
    from taskboard.ui.templates import TemplateSource

log = logging.getLogger("taskboard.components.tasks")


@dataclass(frozen=True)
class TaskEntry:
    task: RestTaskModel
    component: TaskComponent


@dataclass(frozen=True)
class CreateResult:
    """Outcome of :meth:`TasksComponent.add_task`.

    ``component`` is set on success, ``error`` on failure, neither when the
    input was empty and nothing was attempted.
    """

    component: TaskComponent | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.component is not None


class TaskRegistry:
    """Live tasks in insertion order, keyed by task id."""

    def __init__(self):
        self._entries: dict[int, TaskEntry] = {}

    def add(self, task: RestTaskModel, component: TaskComponent) -> TaskEntry:
        if task.id is None:
            raise TaskboardError("cannot register a task that was never persisted")
        if task.id in self._entries:
            raise TaskboardError(f"task {task.id} is already registered")
        if any(e.task is task for e in self._entries.values()):
            raise TaskboardError(f"task object {task!r} is already registered")
        entry = TaskEntry(task, component)
        self._entries[task.id] = entry
        return entry

    def remove(self, task_id: int) -> TaskEntry | None:
        return self._entries.pop(task_id, None)

    def get(self, task_id: int) -> TaskEntry | None:
        return self._entries.get(task_id)

    def ids(self) -> list[int]:
        return list(self._entries)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._entries

    def __iter__(self) -> Iterator[TaskEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


class TasksComponent(Component):
    """The task list: form, rows and their remote synchronization."""

    name = "tasks"

    def __init__(self, client: RestClient, templates: TemplateSource):
        super().__init__()
        self.client = client
        self.templates = templates
        self.registry = TaskRegistry()
        self._input: Element | None = None
        self._list: Element | None = None

    async def init(self) -> Element:
        form = self.templates.build("task-form")
        self._input = form.query("new-description")
        add_button = form.query("add")
        if self._input is None or add_button is None:
            raise MissingCollaborator("task form needs 'new-description' and 'add' elements")

        self._list = Element("ul", name="task-list", css_class="task-list")
        self._element = Element("div", css_class="tasks")
        self._element.append(form, self._list)

        self.bind("click", add_button, lambda _: self.spawn(self._on_add_clicked()))

        await self.load()
        return self._element

    async def load(self) -> int:
        """Mount every task from the store; a failed load leaves the list empty."""
        try:
            tasks = await fetch_tasks(self.client)
        except RemoteError as e:
            log.error("Could not load tasks: %s", e)
            return 0
        mounted = 0
        for task in tasks:
            try:
                await self._mount(task)
            except TaskboardError as e:
                log.error("Skipping task %s: %s", task.id, e)
                continue
            mounted += 1
        log.info("Loaded %d tasks", mounted)
        return mounted

    async def _on_add_clicked(self) -> None:
        result = await self.add_task(self._input.value)
        if result.ok:
            self._input.value = ""
        elif result.error is not None:
            log.warning("Task not added, keeping input: %s", result.error)

    async def add_task(self, description: str) -> CreateResult:
        description = (description or "").strip()
        if not description:
            return CreateResult()

        task = RestTaskModel(self.client, description)
        try:
            await task.create()
        except RemoteError as e:
            log.error("Could not create task %r: %s", description, e)
            return CreateResult(error=e)

        if self._released:
            log.warning("Task %d created after the list was destroyed", task.id)
            await self._discard(task)
            return CreateResult(error=TaskboardError("task list destroyed"))
        try:
            component = await self._mount(task)
        except TaskboardError as e:
            log.error("Task %d created but could not be shown: %s", task.id, e)
            await self._discard(task)
            return CreateResult(error=e)
        return CreateResult(component=component)

    async def _discard(self, task: RestTaskModel) -> None:
        """Delete a created task that never made it into the list."""
        if task.id in self.registry:
            log.warning("Task %d is already listed, not rolling back", task.id)
            return
        try:
            await task.delete()
        except RemoteError as e:
            log.error("Could not roll back task %s: %s", task.id, e)

    async def _mount(self, task: RestTaskModel) -> TaskComponent:
        component = TaskComponent(task, self.templates)
        element = await component.init()
        try:
            self.registry.add(task, component)
        except TaskboardError:
            component.destroy()
            raise
        component.subscribe(COMPLETED_EVENT, lambda t: self.spawn(self.remove_task(t)))
        self._list.append(element)
        return component

    async def remove_task(self, task: RestTaskModel) -> bool:
        entry = self.registry.get(task.id)
        if entry is None:
            log.warning("Task %s is not registered", task.id)
            return False

        try:
            await task.delete()
        except RemoteError as e:
            log.error("Could not delete task %s: %s", task.id, e)
            entry.component.reopen()
            return False

        self.registry.remove(task.id)
        entry.component.destroy()
        return True

    def component_for(self, task_id: int) -> TaskComponent | None:
        entry = self.registry.get(task_id)
        return entry.component if entry else None

    async def settle(self) -> None:
        while True:
            pending = set(self._pending)
            for entry in self.registry:
                pending |= entry.component.pending
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def destroy(self) -> None:
        if self._released:
            return
        for entry in self.registry:
            entry.component.destroy()
        self.registry.clear()
        super().destroy()

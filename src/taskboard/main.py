#!/usr/bin/env python3
"""Taskboard console: main entry point.

Runs an asyncio event loop that:
  1. Loads the task list from the REST store
  2. Reads commands from stdin and turns them into clicks on the views
  3. Writes a screen snapshot after each command when configured
"""

import asyncio
import logging
import signal

from taskboard.app import Application
from taskboard.components.tasks import TasksComponent
from taskboard.config import load_config
from taskboard.core.logging_config import setup_logging
from taskboard.ui.screens import TaskListScreen

log = logging.getLogger("taskboard.main")

HELP = "commands: list | add TEXT | edit ID TEXT | done ID | quit"


class Console:
    """Line-oriented front end over the mounted components."""

    def __init__(self, app: Application):
        self.app = app
        self.screen = TaskListScreen()
        self._running = False

    def stop(self) -> None:
        self._running = False

    def _tasks(self) -> TasksComponent | None:
        comp = self.app.current
        return comp if isinstance(comp, TasksComponent) else None

    def print_list(self) -> None:
        tasks = self._tasks()
        if tasks is None:
            print("(task list not available)")
            return
        if not len(tasks.registry):
            print("(no tasks)")
        for entry in tasks.registry:
            print(f"{entry.task.id:>4}  {entry.task.description}")

    async def handle(self, line: str) -> bool:
        """Run one command. Returns False when the console should exit."""
        cmd, _, rest = line.strip().partition(" ")
        if cmd in ("quit", "exit"):
            return False
        if cmd in ("", "list"):
            self.print_list()
            return True

        tasks = self._tasks()
        if tasks is None:
            print("task list not available")
            return True

        if cmd == "add":
            form = tasks.element.query("new-description")
            form.value = rest
            tasks.element.query("add").click()
        elif cmd in ("edit", "done"):
            task_id, _, text = rest.partition(" ")
            comp = tasks.component_for(int(task_id)) if task_id.isdigit() else None
            if comp is None:
                print(f"no task {task_id!r}")
                return True
            if cmd == "edit":
                comp.element.query("edit").click()
                comp.element.query("description-input").value = text
                comp.element.query("save").click()
            else:
                comp.element.query("complete").click()
        else:
            print(HELP)
            return True

        await self.app.settle()
        self.print_list()
        return True

    def snapshot(self) -> None:
        path = self.app.config.get("ui", {}).get("snapshot")
        if path:
            self.screen.save(self.app.root, path, self.app.toast.messages)

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        await self.app.init()
        for message in self.app.toast.messages:
            print(f"! {message}")
        self.print_list()
        self.snapshot()
        print(HELP)

        self._running = True
        try:
            while self._running:
                line = await loop.run_in_executor(None, input, "> ")
                if not await self.handle(line):
                    break
                self.snapshot()
        except (EOFError, asyncio.CancelledError):
            log.info("Input closed")
        finally:
            await self.app.shutdown()


def main() -> None:
    setup_logging()
    log.info("=== Taskboard ===")

    config = load_config()
    console = Console(Application(config))

    loop = asyncio.new_event_loop()

    def signal_handler():
        log.info("Signal received, stopping...")
        console.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        loop.run_until_complete(console.run())
    finally:
        loop.close()


if __name__ == "__main__":
    main()

"""Application bootstrap.

Chooses the top-level component, mounts its element on the root render
target and replaces whatever was mounted before. Missing templates or
form elements are reported on the toast instead of aborting.
"""

from __future__ import annotations

import logging

from taskboard.api.rest_client import RestClient
from taskboard.components.base import Component
from taskboard.components.login import LoginComponent
from taskboard.components.tasks import TasksComponent
from taskboard.config import DEFAULT_API_URL
from taskboard.core.errors import MissingCollaborator, TemplateNotFound
from taskboard.ui.templates import TemplateSource
from taskboard.ui.toast import Toast
from taskboard.ui.widgets import RenderTarget

log = logging.getLogger("taskboard.app")


class Application:
    """Wires client, templates and components together."""

    def __init__(self, config: dict, client: RestClient | None = None,
                 templates: TemplateSource | None = None,
                 root: RenderTarget | None = None, toast: Toast | None = None):
        self.config = config
        api_cfg = config.get("api", {})
        self.client = client or RestClient(
            api_cfg.get("base_url", DEFAULT_API_URL),
            timeout=api_cfg.get("timeout"),
        )
        self.templates = templates or TemplateSource.load(
            config.get("ui", {}).get("templates")
        )
        self.root = root or RenderTarget()
        self.toast = toast or Toast()
        self.components: list[Component] = []

    def _choose_component(self) -> Component:
        auth = self.config.get("auth", {})
        if auth.get("require_login") and not auth.get("token"):
            return LoginComponent(self.client, self.templates)
        return TasksComponent(self.client, self.templates)

    async def init(self) -> Component | None:
        comp = self._choose_component()
        try:
            element = await comp.init()
        except (TemplateNotFound, MissingCollaborator) as e:
            self.toast.show(f"Cannot start {comp.name}: {e}")
            comp.destroy()
            return None

        for old in self.components:
            old.destroy()
        self.components.clear()

        self.root.mount(element)
        self.components.append(comp)
        log.info("Application initialized with %s", comp.name)
        return comp

    @property
    def current(self) -> Component | None:
        return self.components[-1] if self.components else None

    async def settle(self) -> None:
        for comp in list(self.components):
            await comp.settle()

    async def shutdown(self) -> None:
        await self.settle()
        for comp in self.components:
            comp.destroy()
        self.components.clear()
        await self.client.close()
        log.info("Shutdown complete")

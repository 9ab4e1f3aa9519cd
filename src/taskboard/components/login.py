"""Login panel.

Shown instead of the task list when a login is required and no token is
configured. Authentication itself is not implemented.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taskboard.components.base import Component
from taskboard.core.errors import MissingCollaborator
from taskboard.ui.widgets import Element

if TYPE_CHECKING:
    from taskboard.api.rest_client import RestClient
    from taskboard.ui.templates import TemplateSource

log = logging.getLogger("taskboard.components.login")


class LoginComponent(Component):
    name = "login"

    def __init__(self, client: RestClient, templates: TemplateSource):
        super().__init__()
        self.client = client
        self.templates = templates

    async def init(self) -> Element:
        self._element = self.templates.build("login")
        button = self._element.query("login")
        if button is None:
            raise MissingCollaborator("login template needs a 'login' button")
        self.bind("click", button, lambda _: self.login())
        return self._element

    def login(self) -> bool:
        log.warning("Login is not available; set TASKBOARD_TOKEN instead")
        return False

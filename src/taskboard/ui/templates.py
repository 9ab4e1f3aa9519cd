"""Template source for component views.

Templates are element trees described in YAML and addressed by a stable
id (``task-view``, ``task-edit``...). Every :meth:`TemplateSource.build`
call returns a fresh tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from taskboard.core.errors import TaskboardError, TemplateNotFound
from taskboard.ui.widgets import Element

log = logging.getLogger("taskboard.ui.templates")

DEFAULT_TEMPLATES = Path(__file__).resolve().parent / "templates.yaml"


class TemplateSource:
    """Builds element trees from template definitions."""

    def __init__(self, definitions: dict | None = None):
        self._definitions = dict(definitions or {})

    @classmethod
    def load(cls, path: str | Path | None = None) -> TemplateSource:
        yaml_path = Path(path) if path else DEFAULT_TEMPLATES
        with open(yaml_path) as f:
            definitions = yaml.safe_load(f) or {}
        if not isinstance(definitions, dict):
            raise TaskboardError(f"{yaml_path}: expected a mapping of templates")
        log.info("Loaded %d templates from %s", len(definitions), yaml_path)
        return cls(definitions)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._definitions

    @property
    def ids(self) -> list[str]:
        return list(self._definitions)

    def build(self, template_id: str) -> Element:
        try:
            node = self._definitions[template_id]
        except KeyError:
            raise TemplateNotFound(template_id) from None
        return _build_node(node)


def _build_node(node: dict) -> Element:
    el = Element(
        tag=node.get("tag", "div"),
        name=node.get("name"),
        css_class=node.get("class"),
        text=str(node.get("text", "")),
        hidden=bool(node.get("hidden", False)),
    )
    for child in node.get("children") or []:
        el.append(_build_node(child))
    return el

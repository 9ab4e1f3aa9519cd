"""
Tests for the element tree, templates, toast and screen rendering.
"""
import pytest

from taskboard.core.errors import TemplateNotFound
from taskboard.ui.screens import MIN_HEIGHT, WIDTH, TaskListScreen
from taskboard.ui.templates import TemplateSource
from taskboard.ui.toast import Toast
from taskboard.ui.widgets import Element, RenderTarget


def test_default_templates_cover_every_view(templates):
    for template_id in ("task-view", "task-edit", "task-form", "login"):
        assert template_id in templates


def test_build_returns_fresh_trees(templates):
    a = templates.build("task-view")
    b = templates.build("task-view")
    assert a is not b
    assert a.query("edit") is not b.query("edit")
    assert a.query("edit").text == "Edit"


def test_edit_template_starts_hidden(templates):
    assert templates.build("task-edit").hidden


def test_unknown_template_raises():
    with pytest.raises(TemplateNotFound) as exc_info:
        TemplateSource({}).build("nope")
    assert "nope" in str(exc_info.value)


def test_templates_load_from_yaml_file(tmp_path):
    path = tmp_path / "templates.yaml"
    path.write_text("greeting:\n  tag: p\n  name: hello\n  text: Hi\n")
    source = TemplateSource.load(path)
    assert source.ids == ["greeting"]
    assert source.build("greeting").text == "Hi"


def test_element_remove_detaches_once():
    root = RenderTarget()
    child = Element("li", name="row")
    root.mount(child)
    assert child.attached

    child.remove()
    child.remove()

    assert not child.attached
    assert root.children == []


def test_append_moves_element_between_parents():
    a, b = Element(), Element()
    child = Element(name="c")
    a.append(child)
    b.append(child)
    assert a.children == []
    assert b.query("c") is child


def test_visibility_follows_hidden_ancestors():
    outer = Element(hidden=True)
    inner = Element(name="inner")
    outer.append(inner)
    assert not inner.visible
    outer.hidden = False
    assert inner.visible


def test_click_dispatches_element():
    button = Element("button", name="go")
    seen = []
    button.subscribe("click", seen.append)
    button.click()
    assert seen == [button]


def test_toast_keeps_recent_messages():
    toast = Toast(limit=2)
    for msg in ("a", "b", "c"):
        toast.show(msg)
    assert list(toast.messages) == ["b", "c"]
    toast.clear()
    assert not toast.messages


def _task_row(templates, task_id, text):
    row = Element("li", name=f"task-{task_id}", css_class="task")
    view = templates.build("task-view")
    view.query("description").text = text
    row.append(view, templates.build("task-edit"))
    return row


def test_screen_renders_minimum_frame(templates):
    img = TaskListScreen().render(RenderTarget())
    assert img.size == (WIDTH, MIN_HEIGHT)
    assert img.mode == "RGB"


def test_screen_grows_with_rows(templates):
    root = RenderTarget()
    for i in range(1, 11):
        root.mount(_task_row(templates, i, f"task {i}"))

    img = TaskListScreen().render(root, toasts=["offline"])

    assert img.size[0] == WIDTH
    assert img.size[1] > MIN_HEIGHT


def test_screen_snapshot_written(tmp_path, templates):
    root = RenderTarget()
    root.mount(_task_row(templates, 1, "Buy milk"))
    path = tmp_path / "screen.png"

    TaskListScreen().save(root, str(path))

    assert path.exists()
    assert path.stat().st_size > 0

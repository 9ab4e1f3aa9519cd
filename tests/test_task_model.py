"""
Tests for task entities against the fake store.
"""
import pytest

from taskboard.core.errors import ProtocolError, TaskboardError, TransportError, ValidationError
from taskboard.tasks.model import RestTaskModel, TaskModel, fetch_tasks

from .fakes import RecordingClient


def test_new_task_is_not_persisted():
    task = TaskModel("Buy milk")
    assert task.id is None
    assert not task.persisted
    assert task.timestamp.endswith("Z")


def test_empty_description_is_rejected():
    with pytest.raises(ValidationError):
        TaskModel("   ")


def test_to_dto_exports_wire_fields():
    task = TaskModel("x", timestamp="2024-01-01T00:00:00Z")
    assert task.to_dto() == {"id": None, "description": "x", "timestamp": "2024-01-01T00:00:00Z"}


def test_id_is_write_once():
    task = TaskModel("x", id=3)
    with pytest.raises(TaskboardError):
        task._assign_id(4)
    with pytest.raises(AttributeError):
        task.id = 5
    assert task.id == 3


def test_from_dto_rejects_malformed_records():
    with pytest.raises(ProtocolError):
        TaskModel.from_dto({"id": 1})
    with pytest.raises(ProtocolError):
        TaskModel.from_dto({"id": "one", "description": "x"})


@pytest.mark.asyncio
async def test_create_takes_id_and_timestamp_from_store():
    client = RecordingClient({
        ("POST", "task"): {"id": 5, "description": "x", "timestamp": "2024-01-01T00:00:00Z"},
    })
    task = RestTaskModel(client, "x", timestamp="2030-05-05T00:00:00Z")

    await task.create()

    assert task.id == 5
    assert task.timestamp == "2024-01-01T00:00:00Z"
    method, path, body = client.calls[0]
    assert (method, path) == ("POST", "task")
    assert body == {"id": None, "description": "x", "timestamp": "2030-05-05T00:00:00Z"}


@pytest.mark.asyncio
async def test_failed_create_leaves_task_unpersisted(client, store):
    store.fail("POST", 500, json={"error": "db"})
    task = RestTaskModel(client, "x")

    with pytest.raises(TransportError):
        await task.create()

    assert task.id is None
    assert store.tasks == {}


@pytest.mark.asyncio
async def test_create_without_id_in_response_is_protocol_error():
    client = RecordingClient({("POST", "task"): {"description": "x"}})
    task = RestTaskModel(client, "x")
    with pytest.raises(ProtocolError):
        await task.create()
    assert task.id is None


@pytest.mark.asyncio
async def test_create_twice_is_refused(client):
    task = RestTaskModel(client, "x")
    await task.create()
    with pytest.raises(TaskboardError):
        await task.create()


@pytest.mark.asyncio
async def test_update_sends_only_description(client, store):
    task = RestTaskModel(client, "old")
    await task.create()

    await task.update("new")

    assert task.description == "new"
    put = store.calls_for("PUT")[0]
    assert put.path == f"/api/task/{task.id}"
    assert put.body == {"description": "new"}


@pytest.mark.asyncio
async def test_failed_update_keeps_description(client, store):
    task = RestTaskModel(client, "old")
    await task.create()
    store.fail("PUT", 500)

    with pytest.raises(TransportError):
        await task.update("new")

    assert task.description == "old"


@pytest.mark.asyncio
async def test_update_requires_persisted_task():
    task = RestTaskModel(RecordingClient(), "x")
    with pytest.raises(TaskboardError):
        await task.update("y")


@pytest.mark.asyncio
async def test_delete_addresses_task_by_id(client, store):
    task = RestTaskModel(client, "x")
    await task.create()

    await task.delete()

    assert store.tasks == {}
    assert store.calls_for("DELETE")[0].path == f"/api/task/{task.id}"


@pytest.mark.asyncio
async def test_fetch_tasks_builds_persisted_entities(client, store):
    store.seed("a")
    store.seed("b")

    tasks = await fetch_tasks(client)

    assert [(t.id, t.description) for t in tasks] == [(1, "a"), (2, "b")]
    assert all(isinstance(t, RestTaskModel) for t in tasks)


@pytest.mark.asyncio
async def test_fetch_tasks_requires_results_list():
    client = RecordingClient({("GET", "tasks"): {"items": []}})
    with pytest.raises(ProtocolError):
        await fetch_tasks(client)

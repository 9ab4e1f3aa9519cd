"""Task entities.

A task is created locally without an id, becomes persisted once the store
answers a create call, and is forgotten after a successful delete. Local
fields change only in the success branch of a remote call, so the entity
always reflects the last state the store confirmed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from taskboard.core.errors import ProtocolError, TaskboardError, ValidationError

if TYPE_CHECKING:
    from taskboard.api.rest_client import RestClient

log = logging.getLogger("taskboard.tasks.model")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TaskModel:
    """In-memory task record."""

    __slots__ = ("_id", "description", "timestamp")

    def __init__(self, description: str, timestamp: str | None = None,
                 id: int | None = None):
        if not description or not description.strip():
            raise ValidationError("description is required")
        self._id: int | None = None
        self.description = description
        self.timestamp = timestamp or utc_now_iso()
        if id is not None:
            self._assign_id(id)

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def persisted(self) -> bool:
        return self._id is not None

    def _assign_id(self, value: Any) -> None:
        if self._id is not None:
            raise TaskboardError(f"task {self._id} already has an id")
        self._id = int(value)

    def to_dto(self) -> dict:
        return {
            "id": self._id,
            "description": self.description,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dto(cls, dto: dict, **kwargs) -> TaskModel:
        try:
            return cls(
                description=dto["description"],
                timestamp=dto.get("timestamp"),
                id=dto.get("id"),
                **kwargs,
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise ProtocolError(f"malformed task record: {dto!r}") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id}, description={self.description!r})"


class RestTaskModel(TaskModel):
    """Task backed by the remote store at ``task`` / ``task/{id}``."""

    __slots__ = ("_client",)

    def __init__(self, client: RestClient, description: str,
                 timestamp: str | None = None, id: int | None = None):
        self._client = client
        super().__init__(description, timestamp=timestamp, id=id)

    def _path(self) -> str:
        if self._id is None:
            raise TaskboardError("task has not been persisted yet")
        return f"task/{self._id}"

    async def create(self) -> None:
        """Persist a new task; the store assigns ``id`` and ``timestamp``."""
        if self._id is not None:
            raise TaskboardError(f"task {self._id} is already persisted")
        data = await self._client.post("task", body=self.to_dto())
        if not isinstance(data, dict) or data.get("id") is None:
            raise ProtocolError(f"create response carries no id: {data!r}")
        try:
            self._assign_id(data["id"])
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"create response carries a bad id: {data['id']!r}") from e
        self.timestamp = data.get("timestamp") or self.timestamp
        log.info("Created task %d: %s", self._id, self.description)

    async def update(self, description: str) -> None:
        """Change the description remotely, then locally."""
        path = self._path()
        await self._client.put(path, body={"description": description})
        self.description = description
        log.info("Updated task %d: %s", self._id, description)

    async def delete(self) -> None:
        path = self._path()
        await self._client.delete(path)
        log.info("Deleted task %d", self._id)


async def fetch_tasks(client: RestClient) -> list[RestTaskModel]:
    """Load every task the store knows about."""
    data = await client.get("tasks")
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise ProtocolError(f"task list response carries no results: {data!r}")
    return [RestTaskModel.from_dto(dto, client=client) for dto in results]

"""Error taxonomy.

Remote failures split into :class:`TransportError` (the store answered with
a non-success status, or could not be reached) and :class:`ProtocolError`
(the store answered with success but the body is not usable JSON).
"""

from typing import Any


class TaskboardError(Exception):
    """Base class for every error raised by taskboard."""


class RemoteError(TaskboardError):
    """A call to the remote task store did not succeed."""


class TransportError(RemoteError):
    """Non-success status, or no response at all (``status`` is None).

    ``json`` holds the parsed error body when the store answered with JSON,
    ``response`` the raw text otherwise.
    """

    def __init__(self, status: int | None, json: Any = None,
                 response: str | None = None, url: str | None = None):
        self.status = status
        self.json = json
        self.response = response
        self.url = url
        if status is None:
            msg = f"request to {url} failed: {response}"
        else:
            msg = f"HTTP {status} from {url}"
        super().__init__(msg)


class ProtocolError(RemoteError):
    """Success status with a body that cannot be used."""


class ValidationError(TaskboardError):
    """Rejected input, e.g. an empty task description."""


class TemplateNotFound(TaskboardError, KeyError):
    """No template is registered under the requested id."""

    def __str__(self) -> str:
        return f"template not found: {self.args[0]!r}"


class MissingCollaborator(TaskboardError):
    """A component could not find an element it needs in its template."""

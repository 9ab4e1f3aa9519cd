"""Shared fixtures: fake task store served over HTTP, client and templates."""

from __future__ import annotations

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from taskboard.api.rest_client import RestClient
from taskboard.ui.templates import TemplateSource

from .fakes import FakeTaskStore


@pytest.fixture()
def store() -> FakeTaskStore:
    return FakeTaskStore()


@pytest_asyncio.fixture()
async def server(store: FakeTaskStore):
    srv = TestServer(store.app)
    await srv.start_server()
    yield srv
    await srv.close()


@pytest_asyncio.fixture()
async def client(server: TestServer):
    rest = RestClient(str(server.make_url("/api")))
    yield rest
    await rest.close()


@pytest.fixture()
def templates() -> TemplateSource:
    return TemplateSource.load()

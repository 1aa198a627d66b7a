"""
Pytest fixtures for Greenhouse plugin tests.

Greenhouse is replaced by an in-process fake served through
httpx.MockTransport; the plugin app is driven through httpx.ASGITransport
with an in-memory document store.
"""
from contextlib import asynccontextmanager

import httpx
import pytest
import pytest_asyncio

from greenhouse_plugin import PluginOptions, create_app
from greenhouse_plugin.repositories import InMemoryDocumentStore
from tests.fakes import API_KEY, BOARD_TOKEN, Clock, FakeGreenhouse, default_offices


@pytest.fixture
def greenhouse() -> FakeGreenhouse:
    return FakeGreenhouse(default_offices())


@pytest_asyncio.fixture
async def http_client(greenhouse: FakeGreenhouse):
    """HTTP client whose requests are answered by the fake Greenhouse."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(greenhouse.handle)) as client:
        yield client


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def store(clock: Clock) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(clock=clock)


@pytest.fixture
def options() -> PluginOptions:
    return PluginOptions(url_token=BOARD_TOKEN, api_key=API_KEY, sync_on_init=False)


@pytest.fixture
def app(options, store, http_client):
    return create_app(options, store=store, http_client=http_client, environment={})


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client for plugin API calls."""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def make_client(store, http_client):
    """Factory for a client against an app built with other options."""
    @asynccontextmanager
    async def _make(options: PluginOptions, environment: dict = None, store_override=None):
        app = create_app(
            options,
            store=store_override or store,
            http_client=http_client,
            environment=environment or {},
        )
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

    return _make

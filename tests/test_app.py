"""
Tests for the app factory, plugin startup and the health endpoint.

Run with: pytest tests/test_app.py -v
"""
import httpx
import pytest

from greenhouse_plugin.config import GREENHOUSE_REQUEST_TIMEOUT
from greenhouse_plugin.models import PluginOptions
from greenhouse_plugin.plugin import create_app, create_store, initialize_plugin, lifespan
from greenhouse_plugin.repositories import (
    InMemoryDocumentStore,
    JobRepository,
    NullDocumentStore,
    SettingsRepository,
)

from tests.fakes import BOARD_TOKEN


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "greenhouse-plugin",
            "store": "InMemoryDocumentStore",
            "disabled": False,
        }


class TestDisabled:
    @pytest.mark.asyncio
    async def test_disabled_plugin_serves_no_endpoints(self, make_client, greenhouse):
        options = PluginOptions(url_token=BOARD_TOKEN, disabled=True)
        async with make_client(options) as client:
            jobs = await client.get("/greenhouse/jobs")
            apply = await client.post("/greenhouse/apply", json={})
            health = await client.get("/health")

        assert jobs.status_code == 404
        assert apply.status_code == 404
        assert health.json()["disabled"] is True
        assert greenhouse.requests == []

    @pytest.mark.asyncio
    async def test_disabled_plugin_still_writes_settings(self, store, http_client, greenhouse):
        options = PluginOptions(url_token=BOARD_TOKEN, disabled=True)

        await initialize_plugin(options, {}, store, http_client)

        assert (await SettingsRepository(store).get())["urlToken"] == BOARD_TOKEN
        assert greenhouse.requests == []


class TestInitializePlugin:
    @pytest.mark.asyncio
    async def test_syncs_on_startup(self, store, http_client):
        await initialize_plugin(PluginOptions(url_token=BOARD_TOKEN), {}, store, http_client)

        assert len(await JobRepository(store).list_all()) == 4

    @pytest.mark.asyncio
    async def test_sync_on_init_off(self, store, http_client, greenhouse):
        await initialize_plugin(PluginOptions(url_token=BOARD_TOKEN, sync_on_init=False), {}, store, http_client)

        assert await SettingsRepository(store).get() is not None
        assert greenhouse.requests == []

    @pytest.mark.asyncio
    async def test_no_token_skips_sync(self, store, http_client, greenhouse):
        await initialize_plugin(PluginOptions(), {}, store, http_client)

        assert greenhouse.requests == []

    @pytest.mark.asyncio
    async def test_startup_sync_failure_does_not_raise(self, store, http_client, greenhouse):
        greenhouse.errors[f"/v1/boards/{BOARD_TOKEN}/offices"] = (503, {"error": "down"})

        await initialize_plugin(PluginOptions(url_token=BOARD_TOKEN), {}, store, http_client)

        assert await JobRepository(store).list_all() == []

    @pytest.mark.asyncio
    async def test_persisted_token_used_when_nothing_else_set(self, store, http_client, greenhouse):
        await SettingsRepository(store).create({"name": "Greenhouse Settings", "urlToken": "saved"})

        await initialize_plugin(PluginOptions(), {}, store, http_client)

        assert greenhouse.calls()[0].url.path == "/v1/boards/saved/offices"


class TestCreateStore:
    @pytest.mark.asyncio
    async def test_memory_and_none(self):
        memory, pool = await create_store("memory")
        assert isinstance(memory, InMemoryDocumentStore) and pool is None

        null, pool = await create_store("none")
        assert isinstance(null, NullDocumentStore) and pool is None

    @pytest.mark.asyncio
    async def test_unknown_backend(self):
        with pytest.raises(RuntimeError):
            await create_store("redis")


class TestLifespan:
    @pytest.mark.asyncio
    async def test_owned_client_uses_request_timeout(self):
        app = create_app(PluginOptions(request_timeout=5, sync_on_init=False), store=InMemoryDocumentStore(), environment={})

        async with lifespan(app):
            http_client = app.state.http_client
            assert http_client.timeout == httpx.Timeout(5.0)

        assert http_client.is_closed

    @pytest.mark.asyncio
    async def test_owned_client_default_timeout(self):
        app = create_app(PluginOptions(sync_on_init=False), store=InMemoryDocumentStore(), environment={})

        async with lifespan(app):
            assert app.state.http_client.timeout == httpx.Timeout(GREENHOUSE_REQUEST_TIMEOUT)

    @pytest.mark.asyncio
    async def test_given_client_is_left_open(self, http_client):
        app = create_app(PluginOptions(sync_on_init=False), store=InMemoryDocumentStore(), http_client=http_client, environment={})

        async with lifespan(app):
            assert app.state.http_client is http_client

        assert not http_client.is_closed

"""
Greenhouse plugin application factory.

create_app() builds the FastAPI app from explicit plugin options. The
options, the environment snapshot, the document store and the HTTP client
live on app.state for the lifetime of the process and are handed to the
routers through dependency injection.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from greenhouse_plugin.config import (
    GREENHOUSE_DETAIL_CONCURRENCY,
    GREENHOUSE_REQUEST_TIMEOUT,
    GREENHOUSE_STORE,
    load_environment_settings,
)
from greenhouse_plugin.database import close_db_pool, create_db_pool, run_schema_migrations
from greenhouse_plugin.exceptions import register_exception_handlers
from greenhouse_plugin.models import PluginOptions
from greenhouse_plugin.repositories import (
    DocumentStore,
    InMemoryDocumentStore,
    JobRepository,
    NullDocumentStore,
    PostgresDocumentStore,
    SettingsRepository,
)
from greenhouse_plugin.routers import (
    apply_router,
    dashboard_router,
    health_router,
    jobs_router,
    settings_router,
)
from greenhouse_plugin.services import GreenhouseClient, JobCacheService, JobSyncService, SettingsService

logger = logging.getLogger(__name__)

TRUTHY = ("1", "true", "yes", "on")


async def create_store(backend: str = GREENHOUSE_STORE):
    """Create the document store for a backend name. Returns (store, pool or None)."""
    if backend == "postgres":
        pool = await create_db_pool()
        await run_schema_migrations(pool)
        return PostgresDocumentStore(pool), pool
    if backend == "memory":
        return InMemoryDocumentStore(), None
    if backend == "none":
        return NullDocumentStore(), None
    raise RuntimeError(f"Unknown GREENHOUSE_STORE backend: {backend}")


async def initialize_plugin(
    options: PluginOptions,
    environment: dict,
    store: DocumentStore,
    http_client: httpx.AsyncClient,
):
    """
    Startup work: write the settings document if missing, then warm the job
    cache when a URL token is configured. A failed warm-up is logged and
    does not stop the app.
    """
    settings_service = SettingsService(SettingsRepository(store), options, environment)
    await settings_service.ensure_settings_document()

    if options.disabled or not options.sync_on_init:
        return

    settings = await settings_service.resolve()
    if not settings.url_token:
        logger.info("No Greenhouse URL token configured, skipping initial sync")
        return

    repo = JobRepository(store)
    sync_service = JobSyncService(
        GreenhouseClient(http_client),
        repo,
        concurrency=options.detail_concurrency or GREENHOUSE_DETAIL_CONCURRENCY,
        strict=options.strict_sync,
    )
    try:
        jobs = await JobCacheService(repo, sync_service, settings_service).get_jobs()
        logger.info(f"Greenhouse job cache ready with {len(jobs)} jobs")
    except Exception as e:
        logger.warning(f"Failed to sync Greenhouse jobs on init: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - create store and HTTP client on startup."""
    state = app.state
    pool = None
    owns_http_client = False

    if state.store is None:
        state.store, pool = await create_store()
    if state.http_client is None:
        state.http_client = httpx.AsyncClient(
            timeout=state.options.request_timeout or GREENHOUSE_REQUEST_TIMEOUT
        )
        owns_http_client = True

    await initialize_plugin(state.options, state.environment, state.store, state.http_client)
    yield

    # Cleanup on shutdown
    if owns_http_client:
        await state.http_client.aclose()
    await close_db_pool(pool)


def create_app(
    options: Optional[PluginOptions] = None,
    store: Optional[DocumentStore] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    environment: Optional[dict] = None,
) -> FastAPI:
    """
    Build the plugin app.

    store and http_client are created by the lifespan when not given.
    environment defaults to a snapshot of the process environment.
    """
    options = options or PluginOptions()

    app = FastAPI(title="Greenhouse Job Board Plugin", lifespan=lifespan)
    app.state.options = options
    app.state.environment = load_environment_settings() if environment is None else environment
    app.state.store = store
    app.state.http_client = http_client

    if options.debug or str(app.state.environment.get("debug", "")).lower() in TRUTHY:
        logging.getLogger("greenhouse_plugin").setLevel(logging.DEBUG)

    # CORS middleware for cross-origin requests from the job board
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health_router)

    # Disabled keeps the settings collection consistent but serves nothing
    if options.disabled:
        logger.info("Greenhouse plugin disabled, endpoints not mounted")
        return app

    app.include_router(jobs_router)
    app.include_router(apply_router)
    app.include_router(settings_router)
    if not options.disable_dashboard:
        app.include_router(dashboard_router)

    return app

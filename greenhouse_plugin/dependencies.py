"""
FastAPI dependency injection factories.

The plugin options, environment snapshot, document store and HTTP client
are created once by the app factory and kept on app.state; everything a
handler needs is built from them per request.
"""
import httpx
from fastapi import Depends, Request

from greenhouse_plugin.config import GREENHOUSE_DASHBOARD_ROWS, GREENHOUSE_DETAIL_CONCURRENCY
from greenhouse_plugin.models import PluginOptions
from greenhouse_plugin.repositories import DocumentStore, JobRepository, SettingsRepository
from greenhouse_plugin.services import (
    ApplicationService,
    DashboardService,
    GreenhouseClient,
    JobCacheService,
    JobSyncService,
    SettingsService,
)


# =============================================================================
# Application State
# =============================================================================

def get_options(request: Request) -> PluginOptions:
    """Get the plugin options the app was created with."""
    return request.app.state.options


def get_environment(request: Request) -> dict:
    """Get the settings snapshot taken from the environment at startup."""
    return request.app.state.environment


def get_store(request: Request) -> DocumentStore:
    """Get the host document store."""
    store = request.app.state.store
    if store is None:
        raise RuntimeError("Document store not initialized. Is the app lifespan running?")
    return store


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Get the shared HTTP client used for Greenhouse calls."""
    client = request.app.state.http_client
    if client is None:
        raise RuntimeError("HTTP client not initialized. Is the app lifespan running?")
    return client


# =============================================================================
# Repository Dependencies
# =============================================================================

def get_job_repo(store: DocumentStore = Depends(get_store)) -> JobRepository:
    """Get a JobRepository instance."""
    return JobRepository(store)


def get_settings_repo(store: DocumentStore = Depends(get_store)) -> SettingsRepository:
    """Get a SettingsRepository instance."""
    return SettingsRepository(store)


# =============================================================================
# Service Dependencies
# =============================================================================

def get_greenhouse_client(http_client: httpx.AsyncClient = Depends(get_http_client)) -> GreenhouseClient:
    """Get a GreenhouseClient instance."""
    return GreenhouseClient(http_client)


def get_settings_service(
    repo: SettingsRepository = Depends(get_settings_repo),
    options: PluginOptions = Depends(get_options),
    environment: dict = Depends(get_environment),
) -> SettingsService:
    """Get a SettingsService instance."""
    return SettingsService(repo, options, environment)


def get_job_sync_service(
    client: GreenhouseClient = Depends(get_greenhouse_client),
    repo: JobRepository = Depends(get_job_repo),
    options: PluginOptions = Depends(get_options),
) -> JobSyncService:
    """Get a JobSyncService instance."""
    return JobSyncService(
        client,
        repo,
        concurrency=options.detail_concurrency or GREENHOUSE_DETAIL_CONCURRENCY,
        strict=options.strict_sync,
    )


def get_job_cache_service(
    repo: JobRepository = Depends(get_job_repo),
    sync_service: JobSyncService = Depends(get_job_sync_service),
    settings_service: SettingsService = Depends(get_settings_service),
) -> JobCacheService:
    """Get a JobCacheService instance."""
    return JobCacheService(repo, sync_service, settings_service)


def get_application_service(
    client: GreenhouseClient = Depends(get_greenhouse_client),
    settings_service: SettingsService = Depends(get_settings_service),
) -> ApplicationService:
    """Get an ApplicationService instance."""
    return ApplicationService(client, settings_service)


def get_dashboard_service(
    cache_service: JobCacheService = Depends(get_job_cache_service),
    settings_service: SettingsService = Depends(get_settings_service),
    options: PluginOptions = Depends(get_options),
) -> DashboardService:
    """Get a DashboardService instance."""
    return DashboardService(
        cache_service,
        settings_service,
        rows=options.dashboard_rows or GREENHOUSE_DASHBOARD_ROWS,
    )

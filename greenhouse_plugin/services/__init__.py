"""
Service layer for business logic.
"""
from .greenhouse_client import GreenhouseClient
from .job_sync_service import JobSyncService, FlattenedJob, flatten_offices, enrich_jobs, build_job_document
from .settings_service import SettingsService, resolve_settings
from .job_cache_service import JobCacheService, is_cache_expired
from .job_validation import validate_job_id
from .application_service import ApplicationService
from .dashboard_service import DashboardService, DashboardView, compute_stats, recent_jobs

__all__ = [
    "GreenhouseClient",
    "JobSyncService",
    "FlattenedJob",
    "flatten_offices",
    "enrich_jobs",
    "build_job_document",
    "SettingsService",
    "resolve_settings",
    "JobCacheService",
    "is_cache_expired",
    "validate_job_id",
    "ApplicationService",
    "DashboardService",
    "compute_stats",
    "recent_jobs",
    "DashboardView",
]

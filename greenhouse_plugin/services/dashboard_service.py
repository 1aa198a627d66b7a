"""
Dashboard service - admin widget summarizing the cached Greenhouse jobs.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from greenhouse_plugin.config import GREENHOUSE_DASHBOARD_ROWS
from greenhouse_plugin.exceptions import GreenhousePluginException
from greenhouse_plugin.models import DashboardStats, GreenhouseSettings
from greenhouse_plugin.repositories.document_store import parse_timestamp
from .job_cache_service import JobCacheService
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


def count_distinct(jobs: list[dict], key: str) -> int:
    """Number of distinct non-empty values of key."""
    return len({job.get(key) for job in jobs if job.get(key)})


def compute_stats(jobs: list[dict]) -> DashboardStats:
    return DashboardStats(
        total_jobs=len(jobs),
        departments=count_distinct(jobs, "department"),
        locations=count_distinct(jobs, "location"),
        offices=count_distinct(jobs, "office"),
    )


def recent_jobs(jobs: list[dict], limit: int) -> list[dict]:
    """The first `limit` jobs by descending updatedAt; undated jobs sort last."""
    def sort_key(job: dict):
        updated = parse_timestamp(job.get("updatedAt"))
        return (updated is not None, updated.timestamp() if updated else 0.0)

    return sorted(jobs, key=sort_key, reverse=True)[:limit]


def config_warnings(settings: Optional[GreenhouseSettings]) -> list[str]:
    if settings is None:
        return ["Greenhouse settings could not be loaded."]
    warnings = []
    if not settings.url_token:
        warnings.append("GREENHOUSE_URL_TOKEN is required.")
    if not settings.api_key:
        warnings.append("GREENHOUSE_API_KEY is required for inline forms.")
    return warnings


@dataclass
class DashboardView:
    jobs: list[dict]
    stats: DashboardStats
    recent: list[dict]
    settings: Optional[GreenhouseSettings]
    warnings: list[str] = field(default_factory=list)
    error: Optional[str] = None


class DashboardService:
    """Loads and renders the admin dashboard widget."""

    def __init__(
        self,
        cache_service: JobCacheService,
        settings_service: SettingsService,
        rows: int = GREENHOUSE_DASHBOARD_ROWS,
    ):
        self.cache_service = cache_service
        self.settings_service = settings_service
        self.rows = rows

    async def load(self) -> DashboardView:
        """
        Gather jobs through the cache-or-refresh path.

        Failures are logged and shown as an empty widget with an error line.
        """
        settings = None
        jobs: list[dict] = []
        error = None

        try:
            settings = await self.settings_service.resolve()
            jobs = await self.cache_service.get_jobs()
        except GreenhousePluginException as e:
            logger.warning(f"Dashboard could not load Greenhouse jobs: {e.message}")
            error = e.message
        except Exception as e:
            logger.error(f"Error in Greenhouse dashboard: {e}", exc_info=True)
            error = "Failed to load Greenhouse jobs."

        return DashboardView(
            jobs=jobs,
            stats=compute_stats(jobs),
            recent=recent_jobs(jobs, self.rows),
            settings=settings,
            warnings=config_warnings(settings),
            error=error,
        )

    async def refresh(self) -> int:
        """Clear the cache and force a sync. Returns the number of jobs synced."""
        jobs = await self.cache_service.refresh()
        return len(jobs)

    async def error_view(self, message: str) -> DashboardView:
        """Empty widget carrying an error line, for a refresh whose sync failed."""
        try:
            settings = await self.settings_service.resolve()
        except GreenhousePluginException as e:
            logger.warning(f"Dashboard could not resolve settings: {e.message}")
            settings = None
        return DashboardView(
            jobs=[],
            stats=compute_stats([]),
            recent=[],
            settings=settings,
            warnings=config_warnings(settings),
            error=message,
        )

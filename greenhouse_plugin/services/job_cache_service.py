"""
Job cache service - cache-or-refresh reads and cache maintenance.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from greenhouse_plugin.exceptions import ConfigurationError
from greenhouse_plugin.models import (
    DebugJobSummary,
    DebugResponse,
    GreenhouseDepartment,
    GreenhouseOffice,
    GreenhouseSettings,
)
from greenhouse_plugin.repositories import JobRepository
from greenhouse_plugin.repositories.document_store import parse_timestamp, utc_now
from .job_sync_service import EnrichedJob, FlattenedJob, JobSyncService, build_job_document
from .job_validation import validate_job_id
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


def newest_update(jobs: list[dict]) -> Optional[datetime]:
    timestamps = [parse_timestamp(job.get("updatedAt")) for job in jobs]
    timestamps = [ts for ts in timestamps if ts is not None]
    return max(timestamps) if timestamps else None


def is_cache_expired(jobs: list[dict], expiry_seconds: int, now: datetime) -> bool:
    """
    A cache is expired when it is empty, has no readable timestamp, or its
    newest document is older than expiry_seconds. An expiry of 0 means the
    cache is always stale.
    """
    if expiry_seconds == 0:
        return True
    last_updated = newest_update(jobs)
    if last_updated is None:
        return True
    return (now - last_updated).total_seconds() > expiry_seconds


class JobCacheService:
    """Service behind the job listing, clear-cache, debug and manual-add operations."""

    def __init__(
        self,
        repo: JobRepository,
        sync_service: JobSyncService,
        settings_service: SettingsService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = repo
        self.sync_service = sync_service
        self.settings_service = settings_service
        self.clock = clock

    async def _settings_with_token(self) -> GreenhouseSettings:
        settings = await self.settings_service.resolve()
        if not settings.url_token:
            raise ConfigurationError(
                "Greenhouse URL token is required. Please configure the plugin settings.",
                setting="urlToken",
            )
        return settings

    async def get_jobs(self, force_refresh: bool = False) -> list[dict]:
        """
        Cached jobs while they are fresh, otherwise a full sync.

        The ATS is not contacted when the cache is non-empty, not expired and
        no refresh is forced.
        """
        settings = await self._settings_with_token()
        cached = await self.repo.list_all()

        if cached and not force_refresh and not is_cache_expired(cached, settings.cache_expiry_time, self.clock()):
            logger.debug(f"Serving {len(cached)} cached Greenhouse jobs")
            return cached

        reason = "forced" if force_refresh else ("expired" if cached else "empty")
        logger.info(f"Greenhouse job cache {reason}, syncing")
        return await self.sync_service.sync(settings.url_token)

    async def clear_cache(self) -> int:
        removed = await self.repo.delete_all()
        logger.info(f"Cleared {removed} cached Greenhouse jobs")
        return removed

    async def refresh(self) -> list[dict]:
        """Clear the cache, then run a forced sync."""
        await self.clear_cache()
        return await self.get_jobs(force_refresh=True)

    async def debug_listing(self) -> DebugResponse:
        """Every distinct job id on the board, without detail enrichment."""
        settings = await self._settings_with_token()
        entries = await self.sync_service.fetch_flattened(settings.url_token)

        summaries = [
            DebugJobSummary(
                id=entry.job.id,
                title=entry.job.title,
                office=entry.office.name,
                office_id=entry.office.id,
                department=entry.department.name,
                department_id=entry.department.id,
                location=entry.job.location.name if entry.job.location else None,
                absolute_url=entry.job.absolute_url,
            )
            for entry in entries
        ]
        return DebugResponse(
            available_job_ids=[summary.id for summary in summaries],
            job_details=summaries,
            total_jobs=len(summaries),
        )

    async def add_job(self, job_id: int) -> tuple[dict, bool]:
        """
        Store a single job by id.

        A job already in the cache is returned as is. A new id is validated
        against the board first. Returns (document, created).
        """
        existing = await self.repo.get_by_job_id(job_id)
        if existing:
            return existing, False

        settings = await self._settings_with_token()
        detail = await validate_job_id(self.sync_service.client, settings.url_token, job_id)

        # No tree attribution here, the detail's own department/office lists apply
        entry = FlattenedJob(office=GreenhouseOffice(), department=GreenhouseDepartment(), job=detail)
        document = build_job_document(EnrichedJob(entry=entry, detail=detail))
        created = await self.repo.create(document.to_document())
        logger.info(f"Added Greenhouse job {job_id} to the cache")
        return created, True

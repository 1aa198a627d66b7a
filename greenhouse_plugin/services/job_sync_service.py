"""
Job Sync Service.

Mirrors the Greenhouse board into the jobs collection:

1. Fetch the office -> department -> job tree.
2. Flatten it to one entry per job id (first occurrence wins).
3. Fetch every job's detail record concurrently for content and questions.
4. Upsert the enriched jobs by job id and delete cached jobs that are gone.

All network calls finish before the cache is touched.
"""
import asyncio
import html
import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from greenhouse_plugin.config import GREENHOUSE_DETAIL_CONCURRENCY
from greenhouse_plugin.exceptions import GreenhouseAPIError
from greenhouse_plugin.models import (
    GreenhouseDepartment,
    GreenhouseJobDetail,
    GreenhouseJobSummary,
    GreenhouseOffice,
    JobDocument,
)
from greenhouse_plugin.repositories import JobRepository
from .greenhouse_client import GreenhouseClient

logger = logging.getLogger(__name__)

# Failures that skip a single job instead of failing the sync
DETAIL_FETCH_ERRORS = (GreenhouseAPIError, httpx.HTTPError, PydanticValidationError, ValueError)


@dataclass(frozen=True)
class FlattenedJob:
    """A job together with the office and department it was found under."""
    office: GreenhouseOffice
    department: GreenhouseDepartment
    job: GreenhouseJobSummary


@dataclass(frozen=True)
class EnrichedJob:
    entry: FlattenedJob
    detail: GreenhouseJobDetail


def flatten_offices(offices: list[GreenhouseOffice]) -> list[FlattenedJob]:
    """
    Reduce the offices tree to one entry per distinct job id.

    Traversal order is offices, then departments, then jobs, as returned by
    the API. A job listed under several offices keeps the attribution of the
    first place it was seen.
    """
    seen: set[int] = set()
    flattened = []

    for office in offices:
        for department in office.departments:
            for job in department.jobs:
                if job.id in seen:
                    logger.debug(f"Skipping duplicate job {job.id} under office {office.name!r}")
                    continue
                seen.add(job.id)
                flattened.append(FlattenedJob(office=office, department=department, job=job))

    return flattened


async def enrich_jobs(
    client: GreenhouseClient,
    token: str,
    entries: list[FlattenedJob],
    concurrency: int = GREENHOUSE_DETAIL_CONCURRENCY,
    strict: bool = False,
) -> list[EnrichedJob]:
    """
    Fetch the detail record of every job concurrently.

    With strict=False a failed fetch is logged and the job is left out; with
    strict=True the first failure cancels the fetches still running and
    propagates, and nothing is returned.
    Results keep the order of entries.
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def fetch(entry: FlattenedJob) -> Optional[EnrichedJob]:
        async with semaphore:
            try:
                detail = await client.get_job(token, entry.job.id)
            except DETAIL_FETCH_ERRORS as e:
                if strict:
                    raise
                logger.error(f"Failed to fetch details for job {entry.job.id}, skipping: {e}")
                return None
        return EnrichedJob(entry=entry, detail=detail)

    tasks = [asyncio.create_task(fetch(entry)) for entry in entries]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        # Stop the remaining fetches before the error leaves the sync
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return [result for result in results if result is not None]


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def build_job_document(enriched: EnrichedJob) -> JobDocument:
    """Map Greenhouse field names onto the cached job shape."""
    entry, detail = enriched.entry, enriched.detail
    job = entry.job

    # The tree gives a one-to-one attribution; detail lists are the fallback
    department = entry.department if entry.department.name else (detail.departments[0] if detail.departments else None)
    office = entry.office if entry.office.name else (detail.offices[0] if detail.offices else None)
    location = detail.location or job.location
    title = detail.title or job.title

    return JobDocument(
        job_id=job.id,
        title=title,
        slug=slugify(title),
        content=html.unescape(detail.content or ""),
        department=(department.name if department else None) or "",
        department_id=department.id if department else None,
        office=(office.name if office else None) or "",
        office_id=office.id if office else None,
        location=(location.name if location else None) or "",
        absolute_url=detail.absolute_url or job.absolute_url or "",
        company_name=detail.company_name or job.company_name or "",
        requisition_id=detail.requisition_id or job.requisition_id or "",
        internal_job_id=detail.internal_job_id or job.internal_job_id,
        published_at=detail.first_published or job.first_published,
        greenhouse_updated_at=detail.updated_at or job.updated_at,
        questions=detail.questions,
    )


class JobSyncService:
    """Runs a full sync of one Greenhouse board into the jobs collection."""

    def __init__(
        self,
        client: GreenhouseClient,
        repo: JobRepository,
        concurrency: int = GREENHOUSE_DETAIL_CONCURRENCY,
        strict: bool = False,
    ):
        self.client = client
        self.repo = repo
        self.concurrency = concurrency
        self.strict = strict

    async def fetch_flattened(self, token: str) -> list[FlattenedJob]:
        offices = await self.client.list_offices(token)
        return flatten_offices(offices)

    async def sync(self, token: str) -> list[dict]:
        """
        Full sync. Returns the cached job documents in board order.

        Errors listing the offices propagate before anything is written.
        """
        entries = await self.fetch_flattened(token)
        logger.info(f"Fetched {len(entries)} distinct jobs from Greenhouse board {token}")

        enriched = await enrich_jobs(
            self.client, token, entries,
            concurrency=self.concurrency, strict=self.strict,
        )
        skipped = len(entries) - len(enriched)

        documents = [build_job_document(item) for item in enriched]
        stored = await self.replace_cache(documents)

        logger.info(
            f"Greenhouse sync complete: {len(stored)} jobs cached, "
            f"{skipped} skipped"
        )
        return stored

    async def replace_cache(self, documents: list[JobDocument]) -> list[dict]:
        """
        Upsert documents by job id, then delete cached jobs not in the new set.

        Duplicate cached documents for one job id are collapsed to one.
        Not atomic: an interrupted run leaves a partial cache that the next
        sync repairs.
        """
        existing = await self.repo.list_all()
        by_job_id: dict[int, dict] = {}
        stale: list[dict] = []
        for doc in existing:
            if doc.get("jobId") in by_job_id:
                stale.append(doc)
            else:
                by_job_id[doc.get("jobId")] = doc

        stored = []
        for document in documents:
            data = document.to_document()
            current = by_job_id.pop(document.job_id, None)
            if current:
                stored.append(await self.repo.update(current["id"], data))
            else:
                stored.append(await self.repo.create(data))

        # Anything left was not returned by Greenhouse this time
        stale.extend(by_job_id.values())
        for doc in stale:
            await self.repo.delete(doc["id"])

        if stale:
            logger.info(f"Removed {len(stale)} stale cached jobs")
        return stored

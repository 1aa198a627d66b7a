"""
Greenhouse job endpoints: cached listing, manual add, cache clearing and debug listing.
"""
import logging
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from greenhouse_plugin.dependencies import get_job_cache_service
from greenhouse_plugin.models import AddJobRequest, ClearCacheResponse, DebugResponse
from greenhouse_plugin.services import JobCacheService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/greenhouse", tags=["Greenhouse Jobs"])


@router.get("/jobs")
async def list_jobs(
    refresh: bool = Query(False, description="Force a sync regardless of cache age"),
    service: JobCacheService = Depends(get_job_cache_service),
) -> list[dict]:
    """
    List Greenhouse jobs.

    Serves the cached jobs while they are younger than the configured cache
    expiry; otherwise (or with refresh=true) syncs from Greenhouse first.
    """
    return await service.get_jobs(force_refresh=refresh)


@router.post("/jobs")
async def add_job(
    request: AddJobRequest,
    service: JobCacheService = Depends(get_job_cache_service),
):
    """Add a single job by id after confirming it exists on the board."""
    document, created = await service.add_job(request.job_id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        content=document,
    )


@router.post("/clear-cache", response_model=ClearCacheResponse)
async def clear_cache(service: JobCacheService = Depends(get_job_cache_service)):
    """Delete every cached job document."""
    removed = await service.clear_cache()
    return ClearCacheResponse(jobs_removed=removed)


@router.get("/debug", response_model=DebugResponse)
async def debug_jobs(service: JobCacheService = Depends(get_job_cache_service)):
    """List every job id currently on the board, for checking an id before using it."""
    return await service.debug_listing()

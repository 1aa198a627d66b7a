"""
Application submission endpoint.
"""
from typing import Optional
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from greenhouse_plugin.dependencies import get_application_service
from greenhouse_plugin.models import ApplyRequest
from greenhouse_plugin.services import ApplicationService

router = APIRouter(prefix="/greenhouse", tags=["Greenhouse Applications"])


@router.post("/apply")
async def apply(
    request: Optional[ApplyRequest] = Body(None),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Submit an application for a job.

    Body: {"jobId": ..., "formData": {...}}. The Greenhouse response body and
    status code are passed through.
    """
    result = await service.submit(request)
    return JSONResponse(status_code=result.status_code, content=result.body)

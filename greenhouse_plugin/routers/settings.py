"""
Public settings endpoint for the job board front end.
"""
from fastapi import APIRouter, Depends

from greenhouse_plugin.dependencies import get_settings_service
from greenhouse_plugin.models import PublicSettingsResponse
from greenhouse_plugin.services import SettingsService

router = APIRouter(prefix="/greenhouse", tags=["Greenhouse Settings"])


@router.get("/settings", response_model=PublicSettingsResponse)
async def get_settings(service: SettingsService = Depends(get_settings_service)):
    """Resolved board settings. The API key itself is never returned."""
    return await service.public_settings()

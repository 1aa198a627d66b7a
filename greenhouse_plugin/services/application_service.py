"""
Application service - forwards job applications to Greenhouse.
"""
import logging
from typing import Optional

import httpx
from fastapi import status

from greenhouse_plugin.exceptions import ConfigurationError, GreenhousePluginException, ValidationError
from greenhouse_plugin.models import ApplicationResult, ApplyRequest
from .greenhouse_client import GreenhouseClient
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


class ApplicationService:
    """Service for application submissions."""

    def __init__(self, client: GreenhouseClient, settings_service: SettingsService):
        self.client = client
        self.settings_service = settings_service

    async def submit(self, request: Optional[ApplyRequest]) -> ApplicationResult:
        """
        Validate locally, then submit through the Harvest API.

        Nothing is sent upstream when the API key, the job id or the form
        data is missing. Upstream rejections propagate as GreenhouseAPIError;
        transport and parse failures become a generic 500.
        """
        settings = await self.settings_service.resolve()
        if not settings.api_key:
            raise ConfigurationError(
                "Greenhouse API key is required for application submissions.",
                setting="apiKey",
            )

        if request is None or not request.job_id or request.form_data is None:
            raise ValidationError("Job ID and form data are required.")

        try:
            result = await self.client.submit_application(settings.api_key, request.job_id, request.form_data)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Greenhouse application submission error for job {request.job_id}: {e}", exc_info=True)
            raise GreenhousePluginException(
                "Failed to submit application. Please try again later.",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            ) from e

        logger.info(f"Submitted Greenhouse application for job {request.job_id}")
        return result

"""
Greenhouse API client.

Talks to the public Job Board API (offices, job details) and the Harvest API
(application submission). Every non-2xx answer is raised as a
GreenhouseAPIError carrying the upstream status and body; the caller decides
what a 404 or 401 means in its context. Transport errors (timeouts,
connection failures) propagate as httpx exceptions.
"""
import logging
from typing import Any, Optional

import httpx

from greenhouse_plugin.config import GREENHOUSE_BOARDS_API_URL, GREENHOUSE_HARVEST_API_URL
from greenhouse_plugin.exceptions import GreenhouseAPIError
from greenhouse_plugin.models import (
    ApplicationResult,
    GreenhouseJobDetail,
    GreenhouseOffice,
    GreenhouseOfficeList,
)

logger = logging.getLogger(__name__)


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class GreenhouseClient:
    """Thin async client over a shared httpx.AsyncClient."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        boards_api_url: Optional[str] = None,
        harvest_api_url: Optional[str] = None,
    ):
        self.http_client = http_client
        self.boards_api_url = (boards_api_url or GREENHOUSE_BOARDS_API_URL).rstrip("/")
        self.harvest_api_url = (harvest_api_url or GREENHOUSE_HARVEST_API_URL).rstrip("/")

    def _board_url(self, token: str, path: str) -> str:
        return f"{self.boards_api_url}/v1/boards/{token}/{path}"

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        response = await self.http_client.get(url, params=params)
        if not response.is_success:
            logger.warning(f"Greenhouse GET {url} failed: {response.status_code}")
            raise GreenhouseAPIError(
                response.status_code,
                response.reason_phrase,
                _response_body(response),
                url,
            )
        return response.json()

    async def list_offices(self, token: str) -> list[GreenhouseOffice]:
        """Offices with their departments and the jobs listed under each."""
        data = await self._get_json(self._board_url(token, "offices"))
        return GreenhouseOfficeList(**data).offices

    async def get_office(self, token: str, office_id: int) -> GreenhouseOffice:
        data = await self._get_json(self._board_url(token, f"offices/{office_id}"))
        return GreenhouseOffice(**data)

    async def get_job(self, token: str, job_id: int) -> GreenhouseJobDetail:
        """Full job record including content and application questions."""
        data = await self._get_json(
            self._board_url(token, f"jobs/{job_id}"),
            params={"questions": "true"},
        )
        return GreenhouseJobDetail(**data)

    async def submit_application(
        self, api_key: str, job_id: Any, form_fields: dict[str, Any]
    ) -> ApplicationResult:
        """Submit an application through the Harvest API."""
        url = f"{self.harvest_api_url}/v1/applications"
        response = await self.http_client.post(
            url,
            json={"job_id": job_id, **form_fields},
            auth=httpx.BasicAuth(api_key, ""),
        )
        body = _response_body(response)
        if not response.is_success:
            logger.error(f"Greenhouse application for job {job_id} failed: {response.status_code} - {body}")
            raise GreenhouseAPIError(response.status_code, response.reason_phrase, body, url)
        return ApplicationResult(status_code=response.status_code, body=response.json())

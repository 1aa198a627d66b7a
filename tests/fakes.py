"""
In-process stand-in for the Greenhouse Job Board and Harvest APIs.
"""
import asyncio
import copy
import re
from datetime import datetime, timedelta, timezone

import httpx

BOARD_TOKEN = "acme"
API_KEY = "harvest-secret"


def make_job(job_id: int, title: str, location: str = "Remote") -> dict:
    """Job summary as listed in the offices tree."""
    return {
        "id": job_id,
        "title": title,
        "internal_job_id": job_id * 10,
        "requisition_id": f"REQ-{job_id}",
        "absolute_url": f"https://boards.greenhouse.io/acme/jobs/{job_id}",
        "updated_at": "2026-10-01T12:00:00-04:00",
        "location": {"name": location},
    }


def default_offices() -> list[dict]:
    """Two offices; job 42 is listed under both."""
    return [
        {
            "id": 1,
            "name": "New York",
            "location": "New York, NY",
            "departments": [
                {"id": 10, "name": "Engineering", "jobs": [make_job(101, "Backend Engineer", "New York"), make_job(42, "Platform Engineer", "New York")]},
                {"id": 11, "name": "Design", "jobs": [make_job(102, "Product Designer", "New York")]},
            ],
        },
        {
            "id": 2,
            "name": "London",
            "location": "London, UK",
            "departments": [
                {"id": 20, "name": "Engineering EU", "jobs": [make_job(42, "Platform Engineer", "London"), make_job(201, "Site Reliability Engineer", "London")]},
            ],
        },
    ]


def make_detail(summary: dict, office: dict, department: dict) -> dict:
    """Job detail as returned by GET /jobs/{id}?questions=true."""
    return {
        **summary,
        "company_name": "Acme",
        "first_published": "2026-09-01T09:00:00-04:00",
        "content": f"&lt;p&gt;Join us as a {summary['title']}&lt;/p&gt;",
        "departments": [{"id": department["id"], "name": department["name"]}],
        "offices": [{"id": office["id"], "name": office["name"]}],
        "questions": [
            {"label": "First Name", "required": True, "fields": [{"name": "first_name", "type": "input_text"}]},
        ],
    }


class FakeGreenhouse:
    """Serves the Job Board and Harvest endpoints from in-memory data."""

    def __init__(self, offices: list[dict]):
        self.set_board(offices)
        # path -> (status, body) answered instead of the real data
        self.errors: dict[str, tuple[int, object]] = {}
        # job ids whose detail fetch fails with a network error
        self.unreachable_jobs: set[int] = set()
        # job ids whose detail fetch times out
        self.timeout_jobs: set[int] = set()
        # office ids whose single-office fetch fails with a network error
        self.unreachable_offices: set[int] = set()
        # seconds each successful detail fetch takes
        self.detail_delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed_details: list[int] = []
        self.harvest_unreachable = False
        self.application_response: tuple[int, object] = (200, {"id": 555, "status": "active"})
        self.requests: list[httpx.Request] = []

    def set_board(self, offices: list[dict]):
        """Replace the offices tree; details follow the first office listing each job."""
        self.offices = offices
        self.details: dict[int, dict] = {}
        for office in offices:
            for department in office["departments"]:
                for job in department["jobs"]:
                    self.details.setdefault(job["id"], make_detail(job, office, department))

    def calls(self, path_fragment: str = "") -> list[httpx.Request]:
        return [request for request in self.requests if path_fragment in request.url.path]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.errors:
            status_code, body = self.errors[path]
            return httpx.Response(status_code, json=body)

        if request.method == "POST" and path == "/v1/applications":
            if self.harvest_unreachable:
                raise httpx.ConnectTimeout("timed out", request=request)
            status_code, body = self.application_response
            return httpx.Response(status_code, json=body)

        match = re.fullmatch(r"/v1/boards/(?P<token>[^/]+)/offices", path)
        if match:
            return httpx.Response(200, json={"offices": copy.deepcopy(self.offices)})

        match = re.fullmatch(r"/v1/boards/(?P<token>[^/]+)/offices/(?P<id>\d+)", path)
        if match:
            if int(match["id"]) in self.unreachable_offices:
                raise httpx.ConnectError("connection refused", request=request)
            for office in self.offices:
                if office["id"] == int(match["id"]):
                    return httpx.Response(200, json=copy.deepcopy(office))
            return httpx.Response(404, json={"status": 404, "error": "Office not found"})

        match = re.fullmatch(r"/v1/boards/(?P<token>[^/]+)/jobs/(?P<id>\d+)", path)
        if match:
            return await self._job_detail(request, int(match["id"]))

        return httpx.Response(404, json={"error": f"Unexpected path {path}"})

    async def _job_detail(self, request: httpx.Request, job_id: int) -> httpx.Response:
        if job_id in self.unreachable_jobs:
            raise httpx.ConnectError("connection reset", request=request)
        if job_id in self.timeout_jobs:
            raise httpx.ReadTimeout("read timed out", request=request)

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.detail_delay)
        finally:
            self.in_flight -= 1
        self.completed_details.append(job_id)

        if job_id in self.details:
            return httpx.Response(200, json=copy.deepcopy(self.details[job_id]))
        return httpx.Response(404, json={"status": 404, "error": "Job not found"})


class Clock:
    """Settable clock for the document store."""

    def __init__(self):
        self.now = datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def rewind(self, **delta):
        self.now = datetime.now(timezone.utc) - timedelta(**delta)

    def reset(self):
        self.now = datetime.now(timezone.utc)

"""
Greenhouse Job Board API models.

Represents the data shape returned by the external Greenhouse API.
Field names follow Greenhouse (snake_case); unknown fields are ignored.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class GreenhouseLocation(BaseModel):
    """Location block attached to jobs and offices."""
    name: Optional[str] = None


class GreenhouseRef(BaseModel):
    """Department or office reference embedded in a job detail."""
    id: Optional[int] = None
    name: Optional[str] = None


class GreenhouseJobSummary(BaseModel):
    """Job as listed under a department in the offices tree."""
    id: int
    title: str = ""
    internal_job_id: Optional[int] = None
    requisition_id: Optional[str] = None
    absolute_url: Optional[str] = None
    company_name: Optional[str] = None
    first_published: Optional[str] = None
    updated_at: Optional[str] = None
    location: Optional[GreenhouseLocation] = None


class GreenhouseDepartment(BaseModel):
    """Department node of the offices tree."""
    id: Optional[int] = None
    name: Optional[str] = None
    jobs: list[GreenhouseJobSummary] = Field(default_factory=list)


class GreenhouseOffice(BaseModel):
    """Office node of the offices tree."""
    id: Optional[int] = None
    name: Optional[str] = None
    location: Optional[str] = None
    departments: list[GreenhouseDepartment] = Field(default_factory=list)

    def job_ids(self) -> set[int]:
        """All job ids listed anywhere under this office."""
        return {job.id for department in self.departments for job in department.jobs}


class GreenhouseOfficeList(BaseModel):
    """Response of GET /boards/{token}/offices."""
    offices: list[GreenhouseOffice] = Field(default_factory=list)


class GreenhouseJobDetail(GreenhouseJobSummary):
    """Response of GET /boards/{token}/jobs/{id}?questions=true."""
    content: Optional[str] = None
    departments: list[GreenhouseRef] = Field(default_factory=list)
    offices: list[GreenhouseRef] = Field(default_factory=list)
    questions: list[dict[str, Any]] = Field(default_factory=list)


class ApplicationResult(BaseModel):
    """Upstream answer to an application submission."""
    status_code: int
    body: Any = None

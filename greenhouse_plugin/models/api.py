"""
Request and response models for the /greenhouse endpoints.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplyRequest(CamelModel):
    """Body of POST /greenhouse/apply. Both fields are checked by the handler."""
    job_id: Optional[Union[int, str]] = None
    form_data: Optional[dict[str, Any]] = None


class AddJobRequest(CamelModel):
    """Body of POST /greenhouse/jobs."""
    job_id: int = Field(..., gt=0)


class ClearCacheResponse(CamelModel):
    jobs_removed: int
    message: str = "Cache cleared successfully"


class DebugJobSummary(CamelModel):
    """Minimal per-job metadata returned by the debug listing."""
    id: int
    title: str
    office: Optional[str] = None
    office_id: Optional[int] = None
    department: Optional[str] = None
    department_id: Optional[int] = None
    location: Optional[str] = None
    absolute_url: Optional[str] = None


class DebugResponse(CamelModel):
    available_job_ids: list[int]
    job_details: list[DebugJobSummary]
    total_jobs: int


class DashboardStats(CamelModel):
    total_jobs: int
    departments: int
    locations: int
    offices: int


class PublicSettingsResponse(CamelModel):
    """Settings safe to hand to the job board front end."""
    url_token: str
    board_type: str
    form_type: str
    cycle_fx: str
    cache_expiry_time: int
    labels: dict[str, str]
    custom_css: str = Field("", alias="customCSS")
    api_key_configured: bool

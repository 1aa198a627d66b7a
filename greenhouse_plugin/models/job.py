"""
Cached job document model.

Jobs are stored in the host document store under internal (camelCase)
field names. The store adds id, createdAt and updatedAt.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class JobDocument(BaseModel):
    """A Greenhouse job as written to the jobs collection."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_id: int
    title: str
    slug: str
    content: str = ""
    department: str = ""
    department_id: Optional[int] = None
    office: str = ""
    office_id: Optional[int] = None
    location: str = ""
    absolute_url: str = ""
    company_name: str = ""
    requisition_id: str = ""
    internal_job_id: Optional[int] = None
    published_at: Optional[str] = None
    greenhouse_updated_at: Optional[str] = None
    questions: list[dict[str, Any]] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Data handed to the document store."""
        return self.model_dump(by_alias=True)

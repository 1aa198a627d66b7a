"""
Job repository - cached Greenhouse jobs in the host document store.
"""
from typing import Optional

from greenhouse_plugin.config import JOBS_COLLECTION
from .document_store import DocumentStore


class JobRepository:
    """Repository for the greenhouse-jobs collection."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_all(self, limit: Optional[int] = None) -> list[dict]:
        """Cached jobs, most recently updated first."""
        return await self.store.find(JOBS_COLLECTION, limit=limit)

    async def get_by_job_id(self, job_id: int) -> Optional[dict]:
        docs = await self.store.find(JOBS_COLLECTION, limit=1, where={"jobId": job_id})
        return docs[0] if docs else None

    async def create(self, data: dict) -> dict:
        return await self.store.create(JOBS_COLLECTION, data)

    async def update(self, doc_id: str, data: dict) -> dict:
        return await self.store.update(JOBS_COLLECTION, doc_id, data)

    async def delete(self, doc_id: str) -> None:
        await self.store.delete(JOBS_COLLECTION, doc_id)

    async def delete_all(self) -> int:
        """Delete every cached job. Returns the number of documents removed."""
        docs = await self.list_all()
        for doc in docs:
            await self.delete(doc["id"])
        return len(docs)

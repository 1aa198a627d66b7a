"""
Settings repository - the singleton greenhouse-settings document.
"""
from typing import Optional

from greenhouse_plugin.config import SETTINGS_COLLECTION
from .document_store import DocumentStore


class SettingsRepository:
    """Repository for the greenhouse-settings collection."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def get(self) -> Optional[dict]:
        docs = await self.store.find(SETTINGS_COLLECTION, limit=1)
        return docs[0] if docs else None

    async def create(self, data: dict) -> dict:
        return await self.store.create(SETTINGS_COLLECTION, data)

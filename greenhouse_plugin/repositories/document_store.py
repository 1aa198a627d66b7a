"""
Host document store - collection-scoped find/create/update/delete.

Every document handed out carries the store-managed keys id, createdAt and
updatedAt (ISO 8601, UTC). find() returns the most recently updated
documents first.
"""
import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a store timestamp; returns None for missing or malformed values."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class DocumentStore:
    """Interface of the host CMS document store."""

    async def find(
        self,
        collection: str,
        limit: Optional[int] = None,
        where: Optional[dict[str, Any]] = None,
    ) -> list[dict]:
        raise NotImplementedError

    async def create(self, collection: str, data: dict) -> dict:
        raise NotImplementedError

    async def update(self, collection: str, doc_id: str, data: dict) -> dict:
        raise NotImplementedError

    async def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError


class InMemoryDocumentStore(DocumentStore):
    """Process-local store; contents are lost on restart."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock
        self._collections: dict[str, dict[str, dict]] = {}

    async def find(self, collection, limit=None, where=None):
        docs = [
            doc for doc in self._collections.get(collection, {}).values()
            if not where or all(doc.get(key) == value for key, value in where.items())
        ]
        docs.sort(key=lambda doc: doc["updatedAt"], reverse=True)
        if limit is not None:
            docs = docs[:limit]
        return copy.deepcopy(docs)

    async def create(self, collection, data):
        now = format_timestamp(self.clock())
        doc = {**copy.deepcopy(data), "id": str(uuid.uuid4()), "createdAt": now, "updatedAt": now}
        self._collections.setdefault(collection, {})[doc["id"]] = doc
        return copy.deepcopy(doc)

    async def update(self, collection, doc_id, data):
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise KeyError(f"{collection} document not found: {doc_id}")
        existing = docs[doc_id]
        doc = {
            **existing,
            **copy.deepcopy(data),
            "id": doc_id,
            "createdAt": existing["createdAt"],
            "updatedAt": format_timestamp(self.clock()),
        }
        docs[doc_id] = doc
        return copy.deepcopy(doc)

    async def delete(self, collection, doc_id):
        self._collections.get(collection, {}).pop(doc_id, None)


class NullDocumentStore(DocumentStore):
    """
    Store that keeps nothing.

    Used when settings come purely from options and the environment: writes
    are echoed back with fresh store keys, reads are always empty, so every
    job listing is a live sync and clearing the cache removes zero documents.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    async def find(self, collection, limit=None, where=None):
        return []

    async def create(self, collection, data):
        now = format_timestamp(self.clock())
        return {**copy.deepcopy(data), "id": str(uuid.uuid4()), "createdAt": now, "updatedAt": now}

    async def update(self, collection, doc_id, data):
        now = format_timestamp(self.clock())
        return {**copy.deepcopy(data), "id": doc_id, "createdAt": now, "updatedAt": now}

    async def delete(self, collection, doc_id):
        return None

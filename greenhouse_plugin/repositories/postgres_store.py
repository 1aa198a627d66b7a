"""
Document store backed by PostgreSQL (asyncpg, JSONB documents).
"""
import json
import uuid
from typing import Any, Optional

import asyncpg

from .document_store import DocumentStore, format_timestamp


class PostgresDocumentStore(DocumentStore):
    """Stores every collection in the greenhouse.documents table."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @staticmethod
    def _to_document(row: asyncpg.Record) -> dict:
        data = row["data"]
        if isinstance(data, str):
            data = json.loads(data)
        return {
            **data,
            "id": str(row["id"]),
            "createdAt": format_timestamp(row["created_at"]),
            "updatedAt": format_timestamp(row["updated_at"]),
        }

    @staticmethod
    def _strip_store_keys(data: dict) -> dict:
        return {key: value for key, value in data.items() if key not in ("id", "createdAt", "updatedAt")}

    async def find(
        self,
        collection: str,
        limit: Optional[int] = None,
        where: Optional[dict[str, Any]] = None,
    ) -> list[dict]:
        conditions = ["collection = $1"]
        params: list[Any] = [collection]
        param_idx = 2

        if where:
            conditions.append(f"data @> ${param_idx}::jsonb")
            params.append(json.dumps(where))
            param_idx += 1

        query = f"""
            SELECT id, data, created_at, updated_at
            FROM greenhouse.documents
            WHERE {' AND '.join(conditions)}
            ORDER BY updated_at DESC
        """
        if limit is not None:
            query += f" LIMIT ${param_idx}"
            params.append(limit)

        rows = await self.pool.fetch(query, *params)
        return [self._to_document(row) for row in rows]

    async def create(self, collection: str, data: dict) -> dict:
        row = await self.pool.fetchrow(
            """
            INSERT INTO greenhouse.documents (id, collection, data)
            VALUES ($1, $2, $3::jsonb)
            RETURNING id, data, created_at, updated_at
            """,
            uuid.uuid4(), collection, json.dumps(self._strip_store_keys(data)),
        )
        return self._to_document(row)

    async def update(self, collection: str, doc_id: str, data: dict) -> dict:
        row = await self.pool.fetchrow(
            """
            UPDATE greenhouse.documents
            SET data = data || $3::jsonb, updated_at = NOW()
            WHERE id = $1 AND collection = $2
            RETURNING id, data, created_at, updated_at
            """,
            uuid.UUID(doc_id), collection, json.dumps(self._strip_store_keys(data)),
        )
        if row is None:
            raise KeyError(f"{collection} document not found: {doc_id}")
        return self._to_document(row)

    async def delete(self, collection: str, doc_id: str) -> None:
        await self.pool.execute(
            "DELETE FROM greenhouse.documents WHERE id = $1 AND collection = $2",
            uuid.UUID(doc_id), collection,
        )

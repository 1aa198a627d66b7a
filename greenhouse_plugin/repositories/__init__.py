"""
Repository layer for data access.
"""
from .document_store import DocumentStore, InMemoryDocumentStore, NullDocumentStore
from .postgres_store import PostgresDocumentStore
from .job_repo import JobRepository
from .settings_repo import SettingsRepository

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "NullDocumentStore",
    "PostgresDocumentStore",
    "JobRepository",
    "SettingsRepository",
]

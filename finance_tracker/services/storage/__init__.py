"""
Storage Services Package

Provides the abstract storage interfaces and their implementations.
The document is kept in a local JSON file; an in-memory backend is
available for tests and throwaway sessions.
"""

from finance_tracker.services.storage.interface import (
    AuditStorageInterface,
    DocumentStorageInterface,
    LoadOutcome,
    LoadStatus,
    StorageError,
)
from finance_tracker.services.storage.json_file import (
    JsonFileDocumentStorage,
    JsonLinesAuditStorage,
)
from finance_tracker.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryDocumentStorage,
)
from finance_tracker.services.storage.seed import seed_document

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "DocumentStorageInterface",
    "LoadOutcome",
    "LoadStatus",
    # Exceptions
    "StorageError",
    # JSON file implementation
    "JsonFileDocumentStorage",
    "JsonLinesAuditStorage",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryDocumentStorage",
    # Seed data
    "seed_document",
]

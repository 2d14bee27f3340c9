"""Services package."""

from finance_tracker.services.ids import IdFactory, generate_id
from finance_tracker.services.storage import (
    AuditStorageInterface,
    DocumentStorageInterface,
    InMemoryAuditStorage,
    InMemoryDocumentStorage,
    JsonFileDocumentStorage,
    JsonLinesAuditStorage,
    LoadOutcome,
    LoadStatus,
    StorageError,
    seed_document,
)

__all__ = [
    # Identifiers
    "IdFactory",
    "generate_id",
    # Storage services
    "AuditStorageInterface",
    "DocumentStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryDocumentStorage",
    "JsonFileDocumentStorage",
    "JsonLinesAuditStorage",
    "LoadOutcome",
    "LoadStatus",
    "StorageError",
    "seed_document",
]

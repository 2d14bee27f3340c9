"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the document in a local JSON file today
2. Use in-memory storage for testing
3. Swap in another backend later without touching business logic

The contract is deliberately coarse: load the whole document, save the
whole document. There is no partial or incremental persistence.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from finance_tracker.errors import FinanceError
from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.ledger import Document


class LoadStatus(str, Enum):
    """How a document was obtained."""
    LOADED = "loaded"        # Read from storage
    SEEDED = "seeded"        # Nothing stored yet, seed document used
    RECOVERED = "recovered"  # Stored data unreadable, seed document used


class LoadOutcome(BaseModel):
    """A loaded document plus how it was obtained."""
    model_config = ConfigDict(frozen=True)

    document: Document
    status: LoadStatus
    source: str
    error_message: Optional[str] = None


class DocumentStorageInterface(ABC):
    """
    Abstract interface for whole-document persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_outcome(self) -> LoadOutcome:
        """
        Load the last persisted document.

        Returns the seed document when nothing is stored, and also when
        the stored data cannot be read. Never raises for bad data.
        """
        pass

    @abstractmethod
    def save(self, document: Document) -> None:
        """
        Durably overwrite the entire persisted state.

        Raises:
            StorageError: If the write fails
        """
        pass

    def load(self) -> Document:
        """Load the last persisted document, or the seed document."""
        return self.load_outcome().document


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(FinanceError):
    """Base exception for storage operations."""
    pass

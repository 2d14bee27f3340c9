"""
In-Memory Storage

Used in tests and for throwaway sessions. The document is kept in its
serialized JSON form, so everything saved goes through the same
representation a file would hold.
"""

import json
from typing import Callable, Optional

from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.ledger import Document
from finance_tracker.services.storage.interface import (
    AuditStorageInterface,
    DocumentStorageInterface,
    LoadOutcome,
    LoadStatus,
)
from finance_tracker.services.storage.seed import seed_document


class InMemoryDocumentStorage(DocumentStorageInterface):
    """Keeps the last saved document as a JSON string."""

    def __init__(
        self,
        initial: Optional[Document] = None,
        seed_factory: Callable[[], Document] = seed_document,
        raw: Optional[str] = None,
    ):
        """
        Args:
            initial: Document to start with. None means nothing stored yet.
            seed_factory: Produces the document returned when nothing is stored.
            raw: Pre-stored raw text, to simulate corrupted data.
        """
        self._seed_factory = seed_factory
        self._raw = raw
        if initial is not None:
            self._raw = json.dumps(initial.to_json_dict())
        self.save_count = 0

    @property
    def raw(self) -> Optional[str]:
        return self._raw

    def load_outcome(self) -> LoadOutcome:
        if self._raw is None:
            return LoadOutcome(
                document=self._seed_factory(),
                status=LoadStatus.SEEDED,
                source="memory",
            )
        try:
            document = Document.model_validate_json(self._raw)
        except ValueError as e:
            return LoadOutcome(
                document=self._seed_factory(),
                status=LoadStatus.RECOVERED,
                source="memory",
                error_message=str(e),
            )
        return LoadOutcome(document=document, status=LoadStatus.LOADED, source="memory")

    def save(self, document: Document) -> None:
        self._raw = json.dumps(document.to_json_dict())
        self.save_count += 1


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit events kept in a list, oldest first."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.events))[:limit]

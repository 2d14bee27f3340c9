"""
JSON File Storage Implementation

DESIGN DECISION: The whole document lives in one JSON file because:
1. The data set is one person's finances (small)
2. No database setup required
3. The file is human-readable and easy to back up
4. Whole-document writes match the load/save contract exactly

Writes go to a temporary file that is then renamed over the target,
so a crash mid-write never leaves a half-written document behind.
"""

import json
import os
from pathlib import Path
from typing import Callable, Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_tracker.config import get_settings
from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.ledger import Document
from finance_tracker.services.storage.interface import (
    AuditStorageInterface,
    DocumentStorageInterface,
    LoadOutcome,
    LoadStatus,
    StorageError,
)
from finance_tracker.services.storage.seed import seed_document


logger = structlog.get_logger(__name__)


class JsonFileDocumentStorage(DocumentStorageInterface):
    """
    Stores the document as a single JSON file.

    Missing file: the seed document is returned (and written when
    seed_on_first_run is set). Unreadable file: the seed document is
    returned and the file is left alone, so the user can still recover
    the original data by hand.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        seed_on_first_run: Optional[bool] = None,
        retry_attempts: Optional[int] = None,
        retry_wait_seconds: float = 0.5,
        seed_factory: Callable[[], Document] = seed_document,
    ):
        settings = get_settings().storage
        self._path = Path(path) if path is not None else settings.data_file
        self._seed_on_first_run = (
            settings.seed_on_first_run if seed_on_first_run is None else seed_on_first_run
        )
        self._retry_attempts = retry_attempts or settings.save_retry_attempts
        self._retry_wait_seconds = retry_wait_seconds
        self._seed_factory = seed_factory

    @property
    def path(self) -> Path:
        return self._path

    def load_outcome(self) -> LoadOutcome:
        source = str(self._path)

        if not self._path.exists():
            document = self._seed_factory()
            if self._seed_on_first_run:
                try:
                    self.save(document)
                except StorageError as e:
                    logger.warning("seed_write_failed", path=source, error=str(e))
            logger.info("document_seeded", path=source)
            return LoadOutcome(document=document, status=LoadStatus.SEEDED, source=source)

        try:
            text = self._path.read_text(encoding="utf-8")
            document = Document.model_validate_json(text)
        except (OSError, ValueError) as e:
            logger.warning("document_unreadable", path=source, error=str(e))
            return LoadOutcome(
                document=self._seed_factory(),
                status=LoadStatus.RECOVERED,
                source=source,
                error_message=str(e),
            )

        logger.debug(
            "document_loaded",
            path=source,
            transactions=len(document.transactions),
            cards=len(document.cards),
            loans=len(document.loans),
            investments=len(document.investments),
        )
        return LoadOutcome(document=document, status=LoadStatus.LOADED, source=source)

    def save(self, document: Document) -> None:
        payload = json.dumps(document.to_json_dict(), ensure_ascii=False, indent=2)
        retrying = Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=self._retry_wait_seconds, max=5),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write(payload)
        except OSError as e:
            raise StorageError(f"Failed to save document to {self._path}: {e}")

    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self._path)


class JsonLinesAuditStorage(AuditStorageInterface):
    """Append-only audit log, one JSON object per line."""

    def __init__(self, path: Path):
        self._path = Path(path)

    def append_event(self, event: AuditEvent) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(event.to_json_line() + "\n")
            return True
        except OSError as e:
            raise StorageError(f"Failed to append audit event: {e}")

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        if not self._path.exists():
            return []
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read audit log: {e}")

        events = []
        for line in reversed(lines):
            if not line.strip():
                continue
            events.append(AuditEvent.model_validate(json.loads(line)))
            if len(events) >= limit:
                break
        return events

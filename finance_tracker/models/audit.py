"""
Audit Models for Finance Tracker

Every change to the document is logged for audit purposes.
This provides:
1. Traceability of every mutation
2. Debugging information when a load or save goes wrong
3. A history the user can read back

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every document operation has its own event type.
    """
    # Document lifecycle
    DOCUMENT_LOADED = "document_loaded"
    DOCUMENT_SEEDED = "document_seeded"
    DOCUMENT_LOAD_FAILED = "document_load_failed"
    DOCUMENT_SAVED = "document_saved"
    SAVE_FAILED = "save_failed"

    # Transactions
    TRANSACTION_SAVED = "transaction_saved"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSACTION_PAID_TOGGLED = "transaction_paid_toggled"
    RECURRENCE_EXPANDED = "recurrence_expanded"

    # Cards
    CARD_SAVED = "card_saved"
    CARD_DELETED = "card_deleted"

    # Loans
    LOAN_CREATED = "loan_created"
    LOAN_UPDATED = "loan_updated"
    LOAN_DELETED = "loan_deleted"
    LOAN_SCHEDULE_GENERATED = "loan_schedule_generated"

    # Investments
    INVESTMENT_SAVED = "investment_saved"
    INVESTMENT_DELETED = "investment_deleted"

    # Validation
    VALIDATION_FAILED = "validation_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'card', 'loan')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }

    def to_json_line(self) -> str:
        """One line of the JSON-lines audit file."""
        return json.dumps(self.to_log_dict(), default=str)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.card_deleted(card_id="c1")
        logger.log(event)
    """

    @staticmethod
    def document_loaded(source: str, counts: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_LOADED,
            entity_type="document",
            description=f"Document loaded from {source}",
            details={"source": source, **counts},
        )

    @staticmethod
    def document_seeded(source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_SEEDED,
            entity_type="document",
            description=f"No stored document at {source}, seed document used",
            details={"source": source},
        )

    @staticmethod
    def document_load_failed(source: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="document",
            description="Stored document unreadable, fell back to seed document",
            details={"source": source},
            error_message=error_message,
        )

    @staticmethod
    def document_saved(operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="document",
            description=f"Document persisted after {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def save_failed(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="document",
            description=f"Failed to persist document after {operation}",
            details={"operation": operation},
            error_message=error_message,
        )

    @staticmethod
    def validation_failed(
        entity_type: str,
        entity_id: Optional[str],
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} rejected by validation",
            details={"issues": issues},
        )

    @staticmethod
    def transaction_saved(transaction_id: str, amount: str, kind: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_SAVED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction saved: {kind} {amount}",
            details={"amount": amount, "kind": kind},
        )

    @staticmethod
    def recurrence_expanded(
        transaction_id: str,
        recurrence_group_id: str,
        months: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRENCE_EXPANDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Recurring entry expanded into {months} transactions",
            details={"recurrence_group_id": recurrence_group_id, "months": months},
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
        )

    @staticmethod
    def transaction_paid_toggled(transaction_id: str, is_paid: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_PAID_TOGGLED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Marked as paid" if is_paid else "Marked as unpaid",
            details={"is_paid": is_paid},
        )

    @staticmethod
    def card_saved(card_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_SAVED,
            entity_type="card",
            entity_id=card_id,
            description=f"Card saved: {name}",
        )

    @staticmethod
    def card_deleted(card_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CARD_DELETED,
            entity_type="card",
            entity_id=card_id,
            description="Card deleted",
        )

    @staticmethod
    def loan_created(loan_id: str, name: str, installments: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAN_CREATED,
            entity_type="loan",
            entity_id=loan_id,
            description=f"Loan created: {name}",
            details={"installments": installments},
        )

    @staticmethod
    def loan_schedule_generated(
        loan_id: str,
        installments: int,
        prepaid: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAN_SCHEDULE_GENERATED,
            entity_type="loan",
            entity_id=loan_id,
            description=f"Generated {installments} installment transactions",
            details={"installments": installments, "prepaid": prepaid},
        )

    @staticmethod
    def loan_updated(loan_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAN_UPDATED,
            entity_type="loan",
            entity_id=loan_id,
            description=f"Loan updated: {name} (installments left untouched)",
        )

    @staticmethod
    def loan_deleted(loan_id: str, cascade: bool, removed_transactions: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAN_DELETED,
            severity=AuditSeverity.WARNING if cascade else AuditSeverity.INFO,
            entity_type="loan",
            entity_id=loan_id,
            description=(
                f"Loan deleted with {removed_transactions} linked transactions"
                if cascade else "Loan deleted, linked transactions kept"
            ),
            details={"cascade": cascade, "removed_transactions": removed_transactions},
        )

    @staticmethod
    def investment_saved(investment_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVESTMENT_SAVED,
            entity_type="investment",
            entity_id=investment_id,
            description=f"Investment saved: {name}",
        )

    @staticmethod
    def investment_deleted(investment_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVESTMENT_DELETED,
            entity_type="investment",
            entity_id=investment_id,
            description="Investment deleted",
        )

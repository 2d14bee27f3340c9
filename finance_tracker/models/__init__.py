"""
Data Models Package

This package contains all Pydantic models used in Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.ledger import (
    CreditCard,
    Document,
    Investment,
    Loan,
    Money,
    Transaction,
    TransactionKind,
)
from finance_tracker.models.summaries import (
    CardMetrics,
    CategoryShare,
    DailyFlowPoint,
    InvoicePeriod,
    LoanProgress,
    MonthSummary,
    PortfolioSummary,
    PositionPerformance,
    StatementQuery,
    StatementResult,
    TypeShare,
)
from finance_tracker.models.commands import (
    DeleteCard,
    DeleteInvestment,
    DeleteLoan,
    DeleteTransaction,
    DocumentCommand,
    RecurrenceRequest,
    SetTransactionPaid,
    UpsertCard,
    UpsertInvestment,
    UpsertLoan,
    UpsertTransaction,
)
from finance_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CreditCard",
    "Document",
    "Investment",
    "Loan",
    "Money",
    "Transaction",
    "TransactionKind",
    # Derived results
    "CardMetrics",
    "CategoryShare",
    "DailyFlowPoint",
    "InvoicePeriod",
    "LoanProgress",
    "MonthSummary",
    "PortfolioSummary",
    "PositionPerformance",
    "StatementQuery",
    "StatementResult",
    "TypeShare",
    # Commands
    "DeleteCard",
    "DeleteInvestment",
    "DeleteLoan",
    "DeleteTransaction",
    "DocumentCommand",
    "RecurrenceRequest",
    "SetTransactionPaid",
    "UpsertCard",
    "UpsertInvestment",
    "UpsertLoan",
    "UpsertTransaction",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

"""
Main Orchestrator for Finance Tracker

This module ties together all the components and defines the
end-to-end flow for every edit:

    validate -> pure transform of the whole document -> persist -> swap -> audit

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing invalid reaches the document (validation runs first)
- The in-memory document only changes after a successful save
- Every step is audited

Read-side figures (month summary, card metrics, loan progress, portfolio,
statement) are always computed from the current document on demand.
"""

from datetime import date
from typing import Callable, Optional

import structlog

from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import Settings, get_settings
from finance_tracker.engine.aggregation import compute_month_summary
from finance_tracker.engine.cards import compute_card_metrics
from finance_tracker.engine.loans import compute_loan_progress
from finance_tracker.engine.portfolio import compute_portfolio_summary
from finance_tracker.errors import NotFoundError
from finance_tracker.models.audit import AuditEventBuilder
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
from finance_tracker.models.ledger import (
    CreditCard,
    Document,
    Investment,
    Loan,
    Transaction,
)
from finance_tracker.models.summaries import (
    CardMetrics,
    LoanProgress,
    MonthSummary,
    PortfolioSummary,
    StatementQuery,
    StatementResult,
)
from finance_tracker.models.validation import ValidationResult
from finance_tracker.mutations import apply_command
from finance_tracker.queries import StatementExecutor
from finance_tracker.services.ids import IdFactory, generate_id
from finance_tracker.services.storage import (
    DocumentStorageInterface,
    JsonFileDocumentStorage,
    JsonLinesAuditStorage,
    LoadOutcome,
    LoadStatus,
    StorageError,
)
from finance_tracker.validation import EntityValidator, ensure_valid


logger = structlog.get_logger(__name__)


class FinanceTracker:
    """
    Single entry point for reading and editing the finance document.

    Flow for every write:
    1. Validate → reject before anything changes
    2. Transform → pure (Document, command) -> Document
    3. Persist → the WHOLE document is saved
    4. Swap → the new document becomes current
    5. Audit → one event per logical change

    A failed save leaves the current document untouched.
    """

    def __init__(
        self,
        storage: DocumentStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[EntityValidator] = None,
        id_factory: Optional[IdFactory] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            storage: Where the document is loaded from and saved to
            audit_logger: Audit sink. Defaults to local-only logging.
            validator: Entity validator. Defaults to configured limits.
            id_factory: Generates ids for expanded and scheduled transactions
            clock: Returns "today"; injectable for deterministic tests
        """
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._validator = validator or EntityValidator()
        self._id_factory = id_factory or generate_id
        self._clock = clock or date.today
        self._statements = StatementExecutor()
        self._document: Optional[Document] = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> LoadOutcome:
        """Read the persisted document and make it current."""
        outcome = self._storage.load_outcome()
        self._document = outcome.document

        if outcome.status == LoadStatus.LOADED:
            self._audit_logger.log(AuditEventBuilder.document_loaded(
                source=outcome.source,
                counts={
                    "transactions": len(outcome.document.transactions),
                    "cards": len(outcome.document.cards),
                    "loans": len(outcome.document.loans),
                    "investments": len(outcome.document.investments),
                },
            ))
        elif outcome.status == LoadStatus.SEEDED:
            self._audit_logger.log(AuditEventBuilder.document_seeded(outcome.source))
        else:
            self._audit_logger.log(AuditEventBuilder.document_load_failed(
                source=outcome.source,
                error_message=outcome.error_message or "unreadable document",
            ))

        return outcome

    @property
    def document(self) -> Document:
        """The current document, loaded on first access."""
        if self._document is None:
            self.load()
        return self._document

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def today(self) -> date:
        return self._clock()

    # -------------------------------------------------------------------------
    # Write side
    # -------------------------------------------------------------------------

    def _validate(self, result: ValidationResult) -> None:
        if result.has_errors:
            self._audit_logger.log_validation_failed(
                entity_type=result.entity_type,
                entity_id=result.entity_id,
                issues=[i.to_dict() for i in result.issues],
            )
        ensure_valid(result)

    def _commit(self, operation: str, command: DocumentCommand) -> Document:
        """Transform, persist and swap. Raises StorageError if the save fails."""
        next_document = apply_command(self.document, command, id_factory=self._id_factory)

        try:
            self._storage.save(next_document)
        except StorageError as e:
            self._audit_logger.log_save_failed(operation, str(e))
            raise

        self._document = next_document
        self._audit_logger.log_document_saved(operation)
        return next_document

    def save_transaction(
        self,
        transaction: Transaction,
        recurrence_months: Optional[int] = None,
    ) -> Document:
        """
        Create or edit a transaction.

        With recurrence_months of 2 or more the entry is expanded into
        that many monthly instances sharing one recurrence group.
        """
        recurrence = None
        if recurrence_months is not None and recurrence_months > 1:
            recurrence = RecurrenceRequest(months=recurrence_months)

        self._validate(self._validator.validate_transaction(
            transaction,
            recurrence,
            existing=self.document.find_transaction(transaction.id),
        ))

        document = self._commit(
            "save_transaction",
            UpsertTransaction(transaction=transaction, recurrence=recurrence),
        )

        self._audit_logger.log(AuditEventBuilder.transaction_saved(
            transaction_id=transaction.id,
            amount=str(transaction.amount),
            kind=transaction.kind.value,
        ))
        if recurrence is not None:
            saved = document.find_transaction(transaction.id)
            self._audit_logger.log(AuditEventBuilder.recurrence_expanded(
                transaction_id=transaction.id,
                recurrence_group_id=saved.recurrence_group_id,
                months=recurrence.months,
            ))
        return document

    def delete_transaction(self, transaction_id: str) -> Document:
        document = self._commit(
            "delete_transaction",
            DeleteTransaction(transaction_id=transaction_id),
        )
        self._audit_logger.log(AuditEventBuilder.transaction_deleted(transaction_id))
        return document

    def mark_paid(self, transaction_id: str, is_paid: bool = True) -> Document:
        """
        Set the settlement flag of one transaction.

        Raises:
            NotFoundError: If no transaction has this id
        """
        if self.document.find_transaction(transaction_id) is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")

        document = self._commit(
            "mark_paid",
            SetTransactionPaid(transaction_id=transaction_id, is_paid=is_paid),
        )
        self._audit_logger.log(
            AuditEventBuilder.transaction_paid_toggled(transaction_id, is_paid)
        )
        return document

    def save_card(self, card: CreditCard) -> Document:
        self._validate(self._validator.validate_card(card))
        document = self._commit("save_card", UpsertCard(card=card))
        self._audit_logger.log(AuditEventBuilder.card_saved(card.id, card.name))
        return document

    def delete_card(self, card_id: str) -> Document:
        """Remove a card. Its transactions stay and simply stop resolving."""
        document = self._commit("delete_card", DeleteCard(card_id=card_id))
        self._audit_logger.log(AuditEventBuilder.card_deleted(card_id))
        return document

    def save_loan(self, loan: Loan) -> Document:
        """
        Create or edit a loan.

        A new loan gets its full installment schedule in the same save.
        Editing an existing loan leaves its installments as they are.
        """
        self._validate(self._validator.validate_loan(loan))
        is_new = self.document.find_loan(loan.id) is None

        document = self._commit("save_loan", UpsertLoan(loan=loan))

        if is_new:
            self._audit_logger.log(AuditEventBuilder.loan_created(
                loan.id, loan.name, loan.total_installments
            ))
            self._audit_logger.log(AuditEventBuilder.loan_schedule_generated(
                loan_id=loan.id,
                installments=len(document.transactions_for_loan(loan.id)),
                prepaid=min(loan.paid_installments, loan.total_installments),
            ))
        else:
            self._audit_logger.log(AuditEventBuilder.loan_updated(loan.id, loan.name))
        return document

    def delete_loan(self, loan_id: str, cascade: bool = False) -> Document:
        """
        Remove a loan.

        Args:
            loan_id: Loan to remove
            cascade: Also remove every transaction linked to the loan.
                     Must be confirmed by the user; defaults to False.
        """
        before = len(self.document.transactions)
        document = self._commit(
            "delete_loan",
            DeleteLoan(loan_id=loan_id, cascade=cascade),
        )
        self._audit_logger.log(AuditEventBuilder.loan_deleted(
            loan_id=loan_id,
            cascade=cascade,
            removed_transactions=before - len(document.transactions),
        ))
        return document

    def save_investment(self, investment: Investment) -> Document:
        self._validate(self._validator.validate_investment(investment))
        document = self._commit(
            "save_investment",
            UpsertInvestment(investment=investment),
        )
        self._audit_logger.log(
            AuditEventBuilder.investment_saved(investment.id, investment.name)
        )
        return document

    def delete_investment(self, investment_id: str) -> Document:
        document = self._commit(
            "delete_investment",
            DeleteInvestment(investment_id=investment_id),
        )
        self._audit_logger.log(AuditEventBuilder.investment_deleted(investment_id))
        return document

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def month_summary(
        self,
        reference_month: Optional[date] = None,
        today: Optional[date] = None,
    ) -> MonthSummary:
        today = today or self.today()
        transactions = self.document.transactions
        return compute_month_summary(
            transactions,
            transactions,
            reference_month or today,
            today,
        )

    def card_metrics(
        self,
        card_id: str,
        evaluation_date: Optional[date] = None,
    ) -> CardMetrics:
        """
        Raises:
            NotFoundError: If no card has this id
        """
        card = self.document.find_card(card_id)
        if card is None:
            raise NotFoundError(f"Card not found: {card_id}")
        return compute_card_metrics(
            card,
            self.document.transactions,
            evaluation_date or self.today(),
        )

    def all_card_metrics(self, evaluation_date: Optional[date] = None) -> list[CardMetrics]:
        evaluation_date = evaluation_date or self.today()
        return [
            compute_card_metrics(card, self.document.transactions, evaluation_date)
            for card in self.document.cards
        ]

    def loan_progress(self, loan_id: str) -> LoanProgress:
        """
        Raises:
            NotFoundError: If no loan has this id
        """
        loan = self.document.find_loan(loan_id)
        if loan is None:
            raise NotFoundError(f"Loan not found: {loan_id}")
        return compute_loan_progress(loan, self.document.transactions)

    def portfolio_summary(self) -> PortfolioSummary:
        return compute_portfolio_summary(self.document.investments)

    def statement(
        self,
        query: StatementQuery,
        today: Optional[date] = None,
    ) -> StatementResult:
        return self._statements.execute(self.document, query, today or self.today())


def create_app_components(settings: Optional[Settings] = None) -> FinanceTracker:
    """
    Factory function to create a fully wired tracker.

    Args:
        settings: Settings to use. Defaults to the cached settings.

    Returns:
        A FinanceTracker with its document already loaded
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app
    configure_logging(app_settings.log_level)

    audit_storage = None
    if storage_settings.audit_log_file is not None:
        audit_storage = JsonLinesAuditStorage(storage_settings.audit_log_file)

    storage = JsonFileDocumentStorage(
        path=storage_settings.data_file,
        seed_on_first_run=storage_settings.seed_on_first_run,
        retry_attempts=storage_settings.save_retry_attempts,
    )
    validator = EntityValidator(
        max_recurrence_months=app_settings.max_recurrence_months,
        max_installments=app_settings.max_installments,
    )

    tracker = FinanceTracker(
        storage=storage,
        audit_logger=AuditLogger(audit_storage),
        validator=validator,
    )
    outcome = tracker.load()
    logger.info(
        "tracker_ready",
        source=outcome.source,
        status=outcome.status.value,
        environment=app_settings.app_environment,
    )
    return tracker

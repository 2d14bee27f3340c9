"""
Document Mutator

Every operation here is a pure function (Document, ...) -> Document.
Nothing is persisted and nothing is validated: the driver validates
first, calls one of these, then saves the returned document whole.

Upsert semantics are uniform: an entity whose id already exists is
replaced in place (keeping its position), anything else is appended.
Deleting an unknown id returns an equal document.
"""

from typing import Optional, Sequence, TypeVar

from finance_tracker.engine.loans import generate_loan_schedule
from finance_tracker.engine.recurrence import expand_recurring_transaction
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
from finance_tracker.services.ids import IdFactory, generate_id


E = TypeVar("E", Transaction, CreditCard, Loan, Investment)


def _upsert(items: Sequence[E], item: E) -> tuple[E, ...]:
    if any(existing.id == item.id for existing in items):
        return tuple(item if existing.id == item.id else existing for existing in items)
    return tuple(items) + (item,)


def _remove(items: Sequence[E], entity_id: str) -> tuple[E, ...]:
    return tuple(existing for existing in items if existing.id != entity_id)


# =============================================================================
# TRANSACTIONS
# =============================================================================

def upsert_transaction(
    document: Document,
    transaction: Transaction,
    *,
    recurrence: Optional[RecurrenceRequest] = None,
    id_factory: IdFactory = generate_id,
) -> Document:
    """
    Create or replace a transaction.

    With a recurrence of 2+ months the transaction is expanded: the first
    instance keeps the transaction's id and goes through the ordinary
    upsert (so ids stay unique), the rest are appended.
    """
    if recurrence is None or not recurrence.expands:
        return document.model_copy(
            update={"transactions": _upsert(document.transactions, transaction)}
        )

    first, *rest = expand_recurring_transaction(
        transaction, recurrence.months, id_factory=id_factory
    )
    transactions = _upsert(document.transactions, first) + tuple(rest)
    return document.model_copy(update={"transactions": transactions})


def delete_transaction(document: Document, transaction_id: str) -> Document:
    return document.model_copy(
        update={"transactions": _remove(document.transactions, transaction_id)}
    )


def set_transaction_paid(document: Document, transaction_id: str, is_paid: bool) -> Document:
    """Flip the settlement flag; unknown ids leave the document unchanged."""
    current = document.find_transaction(transaction_id)
    if current is None:
        return document
    return upsert_transaction(document, current.model_copy(update={"is_paid": is_paid}))


# =============================================================================
# CARDS
# =============================================================================

def upsert_card(document: Document, card: CreditCard) -> Document:
    return document.model_copy(update={"cards": _upsert(document.cards, card)})


def delete_card(document: Document, card_id: str) -> Document:
    """Remove a card. Transactions referencing it are left as they are."""
    return document.model_copy(update={"cards": _remove(document.cards, card_id)})


# =============================================================================
# LOANS
# =============================================================================

def upsert_loan(
    document: Document,
    loan: Loan,
    *,
    id_factory: IdFactory = generate_id,
) -> Document:
    """
    Create or update a loan.

    Create: the loan and its whole installment schedule land in the same
    returned document. Update: only the loan record is replaced; the
    previously generated installments are not touched.
    """
    if document.find_loan(loan.id) is not None:
        return document.model_copy(update={"loans": _upsert(document.loans, loan)})

    schedule = generate_loan_schedule(loan, id_factory=id_factory)
    return document.model_copy(
        update={
            "loans": document.loans + (loan,),
            "transactions": document.transactions + schedule,
        }
    )


def delete_loan(document: Document, loan_id: str, *, cascade: bool = False) -> Document:
    """
    Remove a loan.

    With cascade, every transaction whose loan_id matches is removed as
    well (and no other). Without it the installments stay behind as
    ordinary expenses whose loan reference no longer resolves.
    """
    update = {"loans": _remove(document.loans, loan_id)}
    if cascade:
        update["transactions"] = tuple(
            t for t in document.transactions if t.loan_id != loan_id
        )
    return document.model_copy(update=update)


# =============================================================================
# INVESTMENTS
# =============================================================================

def upsert_investment(document: Document, investment: Investment) -> Document:
    return document.model_copy(
        update={"investments": _upsert(document.investments, investment)}
    )


def delete_investment(document: Document, investment_id: str) -> Document:
    return document.model_copy(
        update={"investments": _remove(document.investments, investment_id)}
    )


# =============================================================================
# COMMAND DISPATCH
# =============================================================================

def apply_command(
    document: Document,
    command: DocumentCommand,
    *,
    id_factory: IdFactory = generate_id,
) -> Document:
    """Apply one command and return the next document."""
    if isinstance(command, UpsertTransaction):
        return upsert_transaction(
            document,
            command.transaction,
            recurrence=command.recurrence,
            id_factory=id_factory,
        )
    elif isinstance(command, DeleteTransaction):
        return delete_transaction(document, command.transaction_id)
    elif isinstance(command, SetTransactionPaid):
        return set_transaction_paid(document, command.transaction_id, command.is_paid)
    elif isinstance(command, UpsertCard):
        return upsert_card(document, command.card)
    elif isinstance(command, DeleteCard):
        return delete_card(document, command.card_id)
    elif isinstance(command, UpsertLoan):
        return upsert_loan(document, command.loan, id_factory=id_factory)
    elif isinstance(command, DeleteLoan):
        return delete_loan(document, command.loan_id, cascade=command.cascade)
    elif isinstance(command, UpsertInvestment):
        return upsert_investment(document, command.investment)
    elif isinstance(command, DeleteInvestment):
        return delete_investment(document, command.investment_id)
    raise TypeError(f"Unsupported command: {type(command).__name__}")

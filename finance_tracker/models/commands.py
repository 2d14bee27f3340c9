"""
Mutation Commands

Each command describes one change to the document. The mutator turns
(Document, Command) into a new Document; the driver persists the result.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.ledger import CreditCard, Investment, Loan, Transaction


class Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class RecurrenceRequest(BaseModel):
    """Repeat a new entry monthly. months < 2 means no expansion."""
    model_config = ConfigDict(frozen=True)

    months: int = Field(..., ge=1, description="Total number of occurrences")

    @property
    def expands(self) -> bool:
        return self.months >= 2


class UpsertTransaction(Command):
    transaction: Transaction
    recurrence: Optional[RecurrenceRequest] = None


class DeleteTransaction(Command):
    transaction_id: str


class SetTransactionPaid(Command):
    transaction_id: str
    is_paid: bool


class UpsertCard(Command):
    card: CreditCard


class DeleteCard(Command):
    card_id: str


class UpsertLoan(Command):
    loan: Loan


class DeleteLoan(Command):
    """
    Remove a loan.

    cascade must be explicitly confirmed by the caller; it also removes
    every transaction generated for the loan and cannot be undone.
    """
    loan_id: str
    cascade: bool = False


class UpsertInvestment(Command):
    investment: Investment


class DeleteInvestment(Command):
    investment_id: str


DocumentCommand = Union[
    UpsertTransaction,
    DeleteTransaction,
    SetTransactionPaid,
    UpsertCard,
    DeleteCard,
    UpsertLoan,
    DeleteLoan,
    UpsertInvestment,
    DeleteInvestment,
]

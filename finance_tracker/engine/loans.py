"""
Loan Schedule Generator and loan progress.

A loan's installment transactions are generated exactly once, when the
loan is created. Editing the loan later never touches them, so payment
history recorded against the installments survives any edit.
"""

from decimal import Decimal
from typing import Iterable

from finance_tracker.engine.dates import add_months
from finance_tracker.models.ledger import Loan, Transaction, TransactionKind
from finance_tracker.models.summaries import LoanProgress
from finance_tracker.services.ids import IdFactory, generate_id


FINANCING_CATEGORY = "Financing"


def installment_amount(loan: Loan, index: int) -> Decimal:
    """Flat monthly payment, or the override for the final installment."""
    is_last = index == loan.total_installments - 1
    if is_last and loan.last_installment_value:
        return loan.last_installment_value
    return loan.monthly_payment


def generate_loan_schedule(
    loan: Loan,
    *,
    id_factory: IdFactory = generate_id,
) -> tuple[Transaction, ...]:
    """
    Build the full installment series for a newly created loan.

    Installment i is dated start_date + i months and is marked paid when
    i < paid_installments.

    Raises:
        ValueError: If the loan has no installments
    """
    total = loan.total_installments
    if total < 1:
        raise ValueError(f"Loan {loan.id} must have at least one installment")

    return tuple(
        Transaction(
            id=id_factory(),
            description=f"{loan.name} ({i + 1}/{total})",
            amount=installment_amount(loan, i),
            kind=TransactionKind.EXPENSE,
            date=add_months(loan.start_date, i),
            category=FINANCING_CATEGORY,
            loan_id=loan.id,
            is_paid=i < loan.paid_installments,
        )
        for i in range(total)
    )


def compute_loan_progress(
    loan: Loan,
    all_transactions: Iterable[Transaction],
) -> LoanProgress:
    """
    Progress of a loan.

    The record-based figures (progress_percent, remaining_value) use the
    paid_installments count stored on the loan. The schedule-based
    figures look at the loan's linked transactions; a loan whose
    installments were removed simply reports zeros there.
    """
    linked = [t for t in all_transactions if t.loan_id == loan.id]

    if loan.total_installments > 0:
        progress = Decimal(loan.paid_installments) / Decimal(loan.total_installments) * 100
    else:
        progress = Decimal("0")

    return LoanProgress(
        loan_id=loan.id,
        paid_installments=loan.paid_installments,
        total_installments=loan.total_installments,
        progress_percent=progress,
        remaining_value=loan.total_value - loan.monthly_payment * loan.paid_installments,
        scheduled_installments=len(linked),
        settled_installments=sum(1 for t in linked if t.is_paid),
        outstanding_amount=sum((t.amount for t in linked if not t.is_paid), Decimal("0")),
    )

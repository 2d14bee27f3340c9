"""
Month Aggregator

Dashboard figures for one calendar month, plus the overdue alert which
deliberately looks at the whole document instead of the visible month.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from finance_tracker.engine.dates import is_same_month, month_end, month_start
from finance_tracker.models.ledger import Transaction
from finance_tracker.models.summaries import CategoryShare, DailyFlowPoint, MonthSummary


def filter_month(
    transactions: Iterable[Transaction],
    reference_month: date,
) -> tuple[Transaction, ...]:
    return tuple(t for t in transactions if is_same_month(t.date, reference_month))


def is_overdue(transaction: Transaction, today: date) -> bool:
    """An unpaid expense dated strictly before today."""
    return transaction.is_expense and not transaction.is_paid and transaction.date < today


def count_overdue(all_transactions: Iterable[Transaction], today: date) -> int:
    return sum(1 for t in all_transactions if is_overdue(t, today))


def category_distribution(transactions: Iterable[Transaction]) -> tuple[CategoryShare, ...]:
    """Expense totals per category, in order of first occurrence."""
    totals: dict[str, Decimal] = {}
    for t in transactions:
        if not t.is_expense:
            continue
        totals[t.category] = totals.get(t.category, Decimal("0")) + t.amount
    return tuple(CategoryShare(category=k, amount=v) for k, v in totals.items())


def daily_flow(transactions: Iterable[Transaction]) -> tuple[DailyFlowPoint, ...]:
    """Signed amounts sorted by date; same-day entries keep their order."""
    ordered = sorted(transactions, key=lambda t: t.date)
    return tuple(
        DailyFlowPoint(date=t.date, amount=t.signed_amount, description=t.description)
        for t in ordered
    )


def compute_month_summary(
    transactions: Iterable[Transaction],
    all_transactions: Iterable[Transaction],
    reference_month: date,
    today: date,
) -> MonthSummary:
    """
    Summarize one month.

    Args:
        transactions: Transactions of the month. Anything outside
                      reference_month is filtered out, so passing the
                      full list is also correct.
        all_transactions: The full, unfiltered list (for overdue count)
        reference_month: Any date inside the month to summarize
        today: Evaluation date for the overdue count
    """
    month = filter_month(transactions, reference_month)

    income = sum((t.amount for t in month if t.is_income), Decimal("0"))
    expense = sum((t.amount for t in month if t.is_expense), Decimal("0"))

    return MonthSummary(
        reference_month=month_start(reference_month),
        period_start=month_start(reference_month),
        period_end=month_end(reference_month),
        income_total=income,
        expense_total=expense,
        balance=income - expense,
        category_distribution=category_distribution(month),
        daily_flow=daily_flow(month),
        overdue_count=count_overdue(all_transactions, today),
        transaction_count=len(month),
    )

"""
Card Metrics Calculator

Works on the FULL transaction list: the available limit depends on all
outstanding card debt, not only on the month the user is looking at.
Transactions pointing at other (or deleted) cards are simply ignored.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from finance_tracker.engine.dates import add_months, project_day
from finance_tracker.models.ledger import CreditCard, Transaction
from finance_tracker.models.summaries import CardMetrics, InvoicePeriod


def current_invoice_closing_date(card: CreditCard, today: date) -> date:
    """
    Closing date of the currently open invoice.

    Before the closing day the open invoice closes this month; from the
    closing day on it closes next month.
    """
    if today.day < card.closing_day:
        return project_day(today.year, today.month, card.closing_day)
    return add_months(today.replace(day=1), 1, day=card.closing_day)


def invoice_period(card: CreditCard, today: date) -> InvoicePeriod:
    closing = current_invoice_closing_date(card, today)
    # Project the card's closing day, not the (possibly clamped) closing date.
    start = add_months(closing.replace(day=1), -1, day=card.closing_day)
    return InvoicePeriod(start=start, closing=closing)


def card_expenses(card: CreditCard, transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.card_id == card.id and t.is_expense]


def compute_card_metrics(
    card: CreditCard,
    all_transactions: Iterable[Transaction],
    evaluation_date: date,
) -> CardMetrics:
    """
    Compute invoice total, available limit and next due date for a card.

    available_limit is NOT clamped here and goes negative when unpaid
    debt exceeds the limit; use display_available_limit for rendering.
    """
    period = invoice_period(card, evaluation_date)
    expenses = card_expenses(card, all_transactions)

    invoice = tuple(t for t in expenses if period.contains(t.date))
    unpaid_total = sum((t.amount for t in expenses if not t.is_paid), Decimal("0"))

    return CardMetrics(
        card_id=card.id,
        period=period,
        current_invoice_total=sum((t.amount for t in invoice), Decimal("0")),
        available_limit=card.limit - unpaid_total,
        next_due_date=project_day(period.closing.year, period.closing.month, card.due_day),
        invoice_transactions=invoice,
    )


def display_available_limit(metrics: CardMetrics) -> Decimal:
    return max(metrics.available_limit, Decimal("0"))


def limit_usage_percent(card: CreditCard, metrics: CardMetrics) -> Decimal:
    """Share of the limit in use, 0-100, for the usage bar."""
    if card.limit <= 0:
        return Decimal("100")
    used = card.limit - metrics.available_limit
    percent = used / card.limit * 100
    return min(max(percent, Decimal("0")), Decimal("100"))

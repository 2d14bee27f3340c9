"""
Derived Result Models

Everything here is computed from the document on demand and never
persisted. These are the figures the presentation layer renders.
"""

import datetime
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.ledger import Money, Transaction, TransactionKind


class SummaryModel(BaseModel):
    """Base for derived results: immutable, plain data."""
    model_config = ConfigDict(frozen=True)


# =============================================================================
# CARD METRICS
# =============================================================================

class InvoicePeriod(SummaryModel):
    """
    Date window of the currently open invoice.

    start is exclusive, closing is inclusive.
    """
    start: date
    closing: date

    def contains(self, value: date) -> bool:
        return self.start < value <= self.closing


class CardMetrics(SummaryModel):
    """Figures shown on a credit card tile."""

    card_id: str
    period: InvoicePeriod
    current_invoice_total: Money = Field(
        ...,
        description="Sum of this card's expenses inside the open invoice period"
    )
    available_limit: Money = Field(
        ...,
        description="Limit minus all unpaid card expenses; may be negative"
    )
    next_due_date: date
    invoice_transactions: tuple[Transaction, ...] = ()

    @property
    def closing_date(self) -> date:
        return self.period.closing


# =============================================================================
# MONTH SUMMARY
# =============================================================================

class CategoryShare(SummaryModel):
    """Expense total for one category."""
    category: str
    amount: Money


class DailyFlowPoint(SummaryModel):
    """One signed entry of the cash-flow series."""
    date: datetime.date
    amount: Money = Field(
        ...,
        description="Income positive, expense negative"
    )
    description: str = ""


class MonthSummary(SummaryModel):
    """
    Dashboard figures for one calendar month.

    overdue_count is computed over the whole document, so it does not
    change when the user navigates between months.
    """

    reference_month: date = Field(
        ...,
        description="First day of the summarized month"
    )
    period_start: date
    period_end: date
    income_total: Money
    expense_total: Money
    balance: Money
    category_distribution: tuple[CategoryShare, ...] = ()
    daily_flow: tuple[DailyFlowPoint, ...] = ()
    overdue_count: int = Field(default=0, ge=0)
    transaction_count: int = Field(default=0, ge=0)

    @property
    def has_overdue(self) -> bool:
        return self.overdue_count > 0

    def category_amount(self, category: str) -> Decimal:
        for share in self.category_distribution:
            if share.category == category:
                return share.amount
        return Decimal("0")


# =============================================================================
# LOANS AND INVESTMENTS
# =============================================================================

class LoanProgress(SummaryModel):
    """Progress of one installment contract."""

    loan_id: str
    paid_installments: int
    total_installments: int
    progress_percent: Decimal = Field(
        ...,
        description="paid / total * 100, from the loan record"
    )
    remaining_value: Money = Field(
        ...,
        description="Total value minus flat payments made; may be negative"
    )

    # Derived from the loan's linked transactions
    scheduled_installments: int = 0
    settled_installments: int = 0
    outstanding_amount: Money = Decimal("0")


class PositionPerformance(SummaryModel):
    """Profit of one investment position."""

    investment_id: str
    name: str
    type: str
    amount_invested: Money
    current_value: Money
    profit: Money
    profit_percent: Optional[Decimal] = Field(
        default=None,
        description="None when nothing was invested"
    )

    @property
    def is_positive(self) -> bool:
        return self.profit >= 0


class TypeShare(SummaryModel):
    """Current value held in one asset type."""
    type: str
    current_value: Money


class PortfolioSummary(SummaryModel):
    """Totals across all investment positions."""

    total_invested: Money
    total_current_value: Money
    total_profit: Money
    type_distribution: tuple[TypeShare, ...] = ()
    positions: tuple[PositionPerformance, ...] = ()


# =============================================================================
# STATEMENT
# =============================================================================

class StatementQuery(SummaryModel):
    """
    Filters for the transaction statement of one month.

    All filters combine with AND. An empty search matches everything.
    """

    reference_month: date = Field(
        ...,
        description="Any date inside the month to list"
    )
    search: Optional[str] = Field(
        default=None,
        description="Case-insensitive text matched against description or category"
    )
    kind: Optional[TransactionKind] = None
    only_overdue: bool = False


class StatementResult(SummaryModel):
    """Transactions matching a StatementQuery, newest first."""

    transactions: tuple[Transaction, ...] = ()
    count: int = 0
    overdue_ids: frozenset[str] = frozenset()
    description: str = ""

    @property
    def data_found(self) -> bool:
        return self.count > 0

    def is_overdue(self, transaction_id: str) -> bool:
        return transaction_id in self.overdue_ids

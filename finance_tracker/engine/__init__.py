"""
Derived-finance computation engine.

Pure, deterministic functions of their inputs: no I/O, no hidden state.
"""

from finance_tracker.engine.aggregation import (
    category_distribution,
    compute_month_summary,
    count_overdue,
    daily_flow,
    filter_month,
    is_overdue,
)
from finance_tracker.engine.cards import (
    compute_card_metrics,
    current_invoice_closing_date,
    display_available_limit,
    invoice_period,
    limit_usage_percent,
)
from finance_tracker.engine.dates import (
    add_months,
    days_in_month,
    is_same_month,
    month_end,
    month_start,
    parse_date_only,
    project_day,
    to_date_only_key,
)
from finance_tracker.engine.loans import (
    FINANCING_CATEGORY,
    compute_loan_progress,
    generate_loan_schedule,
    installment_amount,
)
from finance_tracker.engine.portfolio import (
    compute_portfolio_summary,
    position_performance,
)
from finance_tracker.engine.recurrence import expand_recurring_transaction

__all__ = [
    # Dates
    "add_months",
    "days_in_month",
    "is_same_month",
    "month_end",
    "month_start",
    "parse_date_only",
    "project_day",
    "to_date_only_key",
    # Recurrence
    "expand_recurring_transaction",
    # Loans
    "FINANCING_CATEGORY",
    "compute_loan_progress",
    "generate_loan_schedule",
    "installment_amount",
    # Cards
    "compute_card_metrics",
    "current_invoice_closing_date",
    "display_available_limit",
    "invoice_period",
    "limit_usage_percent",
    # Aggregation
    "category_distribution",
    "compute_month_summary",
    "count_overdue",
    "daily_flow",
    "filter_month",
    "is_overdue",
    # Portfolio
    "compute_portfolio_summary",
    "position_performance",
]
